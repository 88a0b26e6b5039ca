class VariantBuilderError(Exception):
    """Base class for errors raised by variantbuilder."""


class ConfigurationError(VariantBuilderError):
    """Raised when a component is configured in a way that cannot be built."""


class MissingValueError(VariantBuilderError):
    """Raised when a deferred value with no source is read."""
