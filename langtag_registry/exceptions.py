class LangTagError(Exception):
    """
    Exception raised for errors in the langtag_registry library.
    This is a generic exception that can be used to indicate various types of
    errors encountered while loading the registry or resolving tags.
    """

    pass


class RegistryError(LangTagError):
    """
    Exception raised when the Language Subtag Registry cannot be loaded.
    This exception is a subclass of ``LangTagError`` and is used to indicate
    issues such as an unreadable source file, a source that is not valid UTF-8,
    or text that does not follow the registry's record format.
    """

    pass


class PathError(LangTagError):
    """
    Exception raised for errors in the file paths used by langtag_registry.
    This error is raised when there is an issue with a path, such as the
    registry file not being found at the configured location, or the cache
    directory not being a directory, or the registry URL returning 404.
    """

    pass
