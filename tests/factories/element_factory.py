"""Factories for screenplay element test data."""

from scriptkit.models import ElementType, ScriptElement


class ElementFactory:
    """Build elements with readable, predictable ids."""

    @staticmethod
    def create(element_type, content, **kwargs):
        kwargs.setdefault("id", f"{ElementType(element_type).value}-{content[:20]}")
        return ScriptElement(type=element_type, content=content, **kwargs)

    @staticmethod
    def actions(count, prefix="action"):
        """``count`` one-line action elements with ids ``action-1`` and up."""
        return [
            ScriptElement(
                id=f"{prefix}-{i}",
                type=ElementType.ACTION,
                content=f"Action line {i}.",
                sequence=i,
            )
            for i in range(1, count + 1)
        ]

    @staticmethod
    def speaker(name, *speech, dual=None, prefix=""):
        """Cue followed by its speech.

        Strings wrapped in parentheses become parentheticals, everything
        else becomes dialogue.
        """
        elements = [
            ScriptElement(
                id=f"{prefix}{name}-cue",
                type=ElementType.CHARACTER,
                content=name,
                dual=dual,
            )
        ]
        for index, text in enumerate(speech):
            element_type = (
                ElementType.PARENTHETICAL
                if text.startswith("(")
                else ElementType.DIALOGUE
            )
            elements.append(
                ScriptElement(
                    id=f"{prefix}{name}-{index}",
                    type=element_type,
                    content=text,
                    dual=dual,
                )
            )
        return elements


def dialogue_lines(count):
    """Dialogue text that wraps to exactly ``count`` lines at width 35."""
    return " ".join(["word"] * (7 * count))
