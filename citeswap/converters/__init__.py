"""Format converters."""
from .docx_container import DocxContainer
from .docx_patcher import DocumentPatcher

__all__ = ["DocxContainer", "DocumentPatcher"]
