from __future__ import annotations


class ExplorerWarning(UserWarning):
    """Advisory condition; the explorer payload is still produced."""


class NoScopeFramesWarning(ExplorerWarning):
    pass


class ListColumnWarning(ExplorerWarning):
    pass


class FrameNotFoundError(KeyError):
    """An identifier passed as data is not bound in the scope."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"object '{self.name}' not found in scope"
