from .report import TranslationReport

__all__ = ["TranslationReport"]
