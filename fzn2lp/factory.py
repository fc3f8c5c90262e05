"""
fzn2lp Factory
==============
One-call entry points around the streaming runtime.
Handles path resolution and sinks so callers only deal with models and facts.
"""

import io
import os
import sys
from typing import Iterable, List, Optional, TextIO, Union
from pathlib import Path

from .runtime import FactStream, TranslatorConfig, TranslationResult
from .language.ast import Statement
from .language.translator import FactTranslator


def translate_file(
    model_path: Union[str, Path],
    out: Optional[TextIO] = None,
    config: Optional[TranslatorConfig] = None,
) -> TranslationResult:
    """
    Translate a .fzn file, streaming facts to out (stdout by default).

    Args:
        model_path: Path to the FlatZinc file (str or Path object).
                    Supports relative paths and user expansion (~/).
        out: Text sink for the facts.
        config: Optional translation configuration override.

    Raises:
        FileNotFoundError: If the model file does not exist.
        TranslationError: If the model cannot be translated.
    """
    path_obj = Path(model_path).expanduser().resolve()

    if not path_obj.exists():
        raise FileNotFoundError(
            f"FlatZinc model not found at: '{path_obj}'\n"
            f"   (Current working directory: '{os.getcwd()}')"
        )

    with open(path_obj, 'r', encoding='utf-8') as f:
        return FactStream(config).run(f, out or sys.stdout)


def translate_string(model: str, config: Optional[TranslatorConfig] = None) -> List[str]:
    """
    Translate FlatZinc source held in a string and return the fact lines.
    Useful for unit testing and REPL usage.
    """
    buf = io.StringIO()
    FactStream(config).run(io.StringIO(model), buf)
    return buf.getvalue().splitlines()


def translate_statements(
    statements: Iterable[Statement],
    config: Optional[TranslatorConfig] = None,
) -> List[str]:
    """
    Translate already-parsed statements (no text involved).
    The stream must contain its solve item.
    """
    config = config or TranslatorConfig()
    translator = FactTranslator(
        ordering_violation_behavior=config.ordering_violation_behavior,
        malformed_annotation_behavior=config.malformed_annotation_behavior,
        echo_comments=config.echo_comments,
    )
    return translator.translate_all(statements)
