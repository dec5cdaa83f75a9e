from .common import ValidationError, ValidationResult, ValidationWarning  # noqa
from .dunning import ensure_valid_dunning_configuration, validate_dunning_configuration  # noqa
from .margins import ensure_valid_margin_configuration, validate_margin_configuration  # noqa
