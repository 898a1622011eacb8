# =========================================================================
# CUSTOM EXCEPTIONS
# =========================================================================

class TaskBridgeError(Exception):
    """Base exception for task bridge errors"""
    pass

class ConfigError(TaskBridgeError):
    """Configuration could not be loaded"""
    pass

class APIError(TaskBridgeError):
    """Reading from a remote service failed"""
    pass

class NotionAPIError(APIError):
    """Notion request or response was unusable"""
    pass

class PomotodoAPIError(APIError):
    """Pomotodo request or response was unusable"""
    pass
