"""Exception classes for mathdown.

Provides standardized exceptions for error handling throughout mathdown.

Detection failures are not errors: a `$` that cannot open or close a math
span simply stays text, and a paragraph that is not block math stays a
paragraph. The exceptions below cover contract violations only.
"""

from __future__ import annotations


class MathdownError(Exception):
    """Base exception for all mathdown errors.

    Subclass this for specific error categories.
    """

    pass


class NodeTypeMismatchError(MathdownError, TypeError):
    """A raw node payload was converted to the wrong node class.

    Raised by ``InlineMath.from_raw`` / ``BlockMath.from_raw`` when the
    payload's ``_type`` tag names a different node kind. This is an internal
    invariant violation, not a user-facing parse error.
    """

    def __init__(self, expected: str, actual: str | None) -> None:
        """Initialize mismatch error.

        Args:
            expected: Node class the caller asked for (e.g., "InlineMath")
            actual: Node kind found in the payload (None if untagged)
        """
        self.expected = expected
        self.actual = actual
        super().__init__(f"Cannot convert {actual!r} payload to {expected}")


class RenderError(MathdownError):
    """Error during rendering.

    Raised when a renderer encounters an AST node it has no rule for.
    """

    def __init__(self, renderer: str, node_type: str) -> None:
        """Initialize render error.

        Args:
            renderer: Name of the renderer (e.g., "html", "markdown")
            node_type: Class name of the unsupported node
        """
        self.renderer = renderer
        self.node_type = node_type
        super().__init__(f"{renderer} renderer cannot render {node_type} nodes")


class PluginError(MathdownError):
    """Error in plugin selection.

    Raised when an unknown plugin name is requested.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
