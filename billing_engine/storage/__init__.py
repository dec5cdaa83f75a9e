from .loader import (  # noqa
    CustomerBillingSnapshot,
    dunning_configuration_from_dict,
    load_snapshot,
    margin_configuration_from_dict,
    read_document,
)
