from viewcomponents.components import Component
from viewcomponents.validation import Inclusion, Presence


class State(Component):
    """
    A coloured status badge, e.g. "Open" or "Closed".
    """

    COLOR_CLASS_MAPPINGS = {
        "default": "",
        "green": "State--green",
        "red": "State--red",
        "purple": "State--purple",
    }

    validation_rules = [
        Inclusion("color", choices=COLOR_CLASS_MAPPINGS),
        Presence("title", "content"),
    ]

    def __init__(self, title, color="default"):
        self.color = color
        self.title = title

    def get_context_data(self, parent_context=None):
        context = super().get_context_data(parent_context)
        context["color_class"] = self.COLOR_CLASS_MAPPINGS.get(self.color, "")
        return context
