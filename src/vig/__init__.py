"""Terminal side-by-side git diff viewer with vim-style navigation."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "diff",
    "git",
    "github",
    "integrations",
    "keymaps",
    "modes",
    "motions",
    "navigation",
    "runtime",
    "search",
    "session",
]

__version__ = "0.1.0"
