from viewcomponents.components import Component
from viewcomponents.validation import Presence


class Message(Component):
    validation_rules = [Presence("content")]

    def __init__(self, message):
        self.message = message
