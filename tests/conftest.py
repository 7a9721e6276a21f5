from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest

from support import EditorCalls, FakeRepository
from vig.integrations import EditorLauncher
from vig.runtime import EventQueue, InlineLoader, ViewerConfig
from vig.session import ViewerSession


@pytest.fixture
def repository(tmp_path: Path) -> FakeRepository:
    return FakeRepository(tmp_path)


@pytest.fixture
def editor_calls() -> EditorCalls:
    return EditorCalls()


@pytest.fixture
def make_session(
    repository: FakeRepository, editor_calls: EditorCalls
) -> Callable[..., ViewerSession]:
    def factory(**overrides: object) -> ViewerSession:
        options: Dict[str, object] = {
            "config": ViewerConfig(github=False),
            "editor": EditorLauncher(
                repository.root, environ={"EDITOR": "vim"}, runner=editor_calls
            ),
            "events": EventQueue(),
            "loader_cls": InlineLoader,
        }
        options.update(overrides)
        return ViewerSession(repository, **options)  # type: ignore[arg-type]

    return factory
