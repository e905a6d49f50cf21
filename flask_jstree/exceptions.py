class JsTreeException(Exception):
    """Base Flask-JsTree exception"""

    pass


class ConfigurationError(JsTreeException):
    """
    Raised when a tree widget is rendered with an invalid configuration,
    a missing data route or an unknown tree type.
    No markup or script is produced when it's raised.
    """

    pass
