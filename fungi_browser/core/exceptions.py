class FungiBrowserError(Exception):
    """Base exception for all fungi_browser errors"""
    pass

class ConfigError(FungiBrowserError):
    """Invalid or inconsistent global.json values"""
    pass

class DatasetLoadError(FungiBrowserError):
    """
    The remote archive could not be fetched, unpacked or parsed.
    Network errors, a missing occurrences.txt, malformed text, etc
    """
    pass

class InvalidColumnError(FungiBrowserError, KeyError):
    """A column selector is not part of the allowed set for the operation"""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""

class InvalidFilterError(FungiBrowserError, ValueError):
    """FilterSpec values are inconsistent (e.g. year min > year max)"""
    pass

class ExportError(FungiBrowserError):
    """Rendering a visualisation to an image failed"""
    pass
