class ConversionError(Exception):
    """Base class for failures that abort a whole PPTX conversion."""

    code = "CONVERSION_FAILED"

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "Failed to convert PPTX file"
        super().__init__(message)
        # Use exception chaining if cause is provided
        self.__cause__ = cause


class PackageInvalidError(ConversionError):
    """Raised when the input is not a zip or lacks the root parts of a PPTX."""

    code = "PACKAGE_INVALID"

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "Input is not a valid PPTX package"
        super().__init__(message, cause=cause)


class PackageEncryptedError(ConversionError):
    """Raised when the package is encrypted or password-protected."""

    code = "PACKAGE_ENCRYPTED"

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "PPTX is encrypted or password-protected"
        super().__init__(message, cause=cause)


class PackageCorruptedError(ConversionError):
    """Raised when a required part is missing or the archive looks hostile."""

    code = "PACKAGE_CORRUPTED"

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "PPTX package is corrupted"
        super().__init__(message, cause=cause)


class XmlParseError(Exception):
    """Raised when one XML part cannot be parsed."""

    code = "XML_PARSE_FAILED"

    def __init__(self, part_path: str, message: str = None, *, cause: Exception = None):
        self.part_path = part_path
        if message is None:
            message = f"Malformed XML in part: {part_path}"
        super().__init__(message)
        self.__cause__ = cause


class ElementParseError(Exception):
    """Raised when a single shape-tree element is malformed."""

    code = "ELEMENT_PARSE_FAILED"

    def __init__(
        self,
        element_type: str,
        message: str = None,
        *,
        element_id: str | None = None,
        cause: Exception = None,
    ):
        self.element_type = element_type
        self.element_id = element_id
        if message is None:
            message = f"Failed to parse {element_type} element"
        super().__init__(message)
        self.__cause__ = cause


class SlideParseError(Exception):
    """Raised when a slide cannot be parsed at all."""

    code = "SLIDE_PARSE_FAILED"

    def __init__(self, slide_index: int, message: str = None, *, cause: Exception = None):
        self.slide_index = slide_index
        if message is None:
            message = f"Failed to parse slide {slide_index}"
        super().__init__(message)
        self.__cause__ = cause
