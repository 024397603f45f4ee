from viewcomponents.components import Component


class UnknownKindComponent(Component):
    def __init__(self, title):
        self.title = title
