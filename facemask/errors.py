"""Exceptions raised by the mask pipeline. The CLI maps them to exit codes."""


class FaceMaskError(RuntimeError):
    """Base class for fatal pipeline errors."""


class ModelLoadError(FaceMaskError):
    """A cascade model file is missing or could not be unpacked."""


class MaskAssetError(FaceMaskError):
    """The mask image could not be opened or decoded."""


class ImageReadError(FaceMaskError):
    """The source image could not be decoded."""


class ImageWriteError(FaceMaskError):
    """The output image could not be written."""


class UnsupportedFormatError(FaceMaskError):
    """The output extension is not one of the supported encoders."""
