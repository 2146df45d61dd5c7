"""
Exceptions raised by the macro engine.

Degraded input (undefined macros, missing arguments, unbalanced parentheses)
is never an error; these cover contract breaches and unreadable files only.
"""


class EmbeddedCodeError(RuntimeError):
    """An embedded code token reached the expander.

    Code fences must be converted with `embedded_parse` first.
    """

    def __init__(self, offset: int) -> None:
        super().__init__(
            f"Embedded code at offset {offset}: call embedded_parse before expanding"
        )
        self.offset: int = offset


class MacroRecursionError(RecursionError):
    """Macro nesting went past the configured maximum depth."""

    def __init__(self, name: str, depth: int) -> None:
        super().__init__(f"Macro '{name}' nested deeper than {depth} levels")
        self.name: str = name
        self.depth: int = depth


class MacroFileError(ValueError):
    """A macro definition file holds content that is not a definition."""

    def __init__(self, path: str, offset: int, context: str) -> None:
        super().__init__(f"{path}: unparsed data ({offset}): {context}")
        self.path: str = path
        self.offset: int = offset
        self.context: str = context
