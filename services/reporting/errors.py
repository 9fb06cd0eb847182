from utils.image_processing import ImageDecodeError  # re-exported for callers


class ReportGenerationError(RuntimeError):
    """Document-fatal failure: no partial output is returned."""


class RenderCancelled(RuntimeError):
    """Raised between photo blocks when the render's cancellation token fires."""


class ReportLoadError(ValueError):
    """Report payload does not have the expected structure."""


__all__ = ['ImageDecodeError', 'ReportGenerationError', 'RenderCancelled', 'ReportLoadError']
