from viewcomponents.components import Component


class BadSyntaxComponent(Component):
    def __init__(self, title):
        self.title = title
