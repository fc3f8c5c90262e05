from __future__ import annotations

from pathlib import Path
from typing import List
import pytest

from fzn2lp.language.parser import parse_fzn
from fzn2lp.language.translator import FactTranslator


@pytest.fixture(scope="session")
def repo_root() -> Path:
    # tests/ -> repo root
    return Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session")
def examples_dir(repo_root: Path) -> Path:
    return repo_root / "examples"


@pytest.fixture(scope="session")
def queens_model_path(examples_dir: Path) -> Path:
    p = examples_dir / "queens.fzn"
    assert p.exists(), f"Missing example model: {p}"
    return p


@pytest.fixture(scope="session")
def wrong_order_model_path(examples_dir: Path) -> Path:
    p = examples_dir / "wrong_order.fzn"
    assert p.exists(), f"Missing example model: {p}"
    return p


@pytest.fixture(scope="session")
def no_solve_model_path(examples_dir: Path) -> Path:
    p = examples_dir / "no_solve.fzn"
    assert p.exists(), f"Missing example model: {p}"
    return p


@pytest.fixture
def translator() -> FactTranslator:
    return FactTranslator()


def translate_text(text: str, translator: FactTranslator = None) -> List[str]:
    """Facts for every statement in text, without the end-of-stream check."""
    translator = translator or FactTranslator()
    facts: List[str] = []
    for stmt in parse_fzn(text):
        facts.extend(translator.translate(stmt))
    return facts
