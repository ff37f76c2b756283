class RichTextError(Exception):
    """Base class for errors raised by this package."""


class RegistryConfigurationError(RichTextError, ValueError):
    """Error raised when a tag registry declares something the renderer cannot honor.

    This indicates a broken deployment rather than a bad document, so it is raised while the
    registry is being built and never recovered from locally.
    """

    def __init__(self, problems: list[str]):
        self.problems = problems
        self.message = "Invalid tag registry: " + "; ".join(problems)
        super().__init__(self.message)


class UnhandledTypeError(RichTextError, KeyError):
    """Error raised when a block or wrapper type has no entry in the tag registry."""

    def __init__(self, type_id: str, kind: str = "block"):
        self.type_id = type_id
        self.kind = kind
        self.message = f"Unhandled {kind} type: {type_id!r}"
        super().__init__(self.message)

    def __str__(self) -> str:
        # -- KeyError.__str__() would repr() the message, adding a layer of quotes --
        return self.message
