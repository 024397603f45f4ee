import jinja2
from jinja2 import nodes
from jinja2.ext import Extension
from markupsafe import Markup, escape

from viewcomponents.rendering import render_component


def _as_output(context, html):
    if context.eval_ctx.autoescape:
        return escape(html)
    return Markup(html)


@jinja2.pass_context
def render_component_global(context, component):
    """
    Usage: {{ render_component(my_component) }}
    """
    return _as_output(context, render_component(component, context.get_all()))


class ComponentExtension(Extension):
    """
    Adds ``{% component obj %}...{% endcomponent %}``, which renders ``obj`` with the
    tag's body as its content, and the ``render_component(obj)`` global.
    """

    tags = {"component"}

    def __init__(self, environment):
        super().__init__(environment)

        self.environment.globals.update(
            {
                "render_component": render_component_global,
            }
        )

    def parse(self, parser):
        lineno = next(parser.stream).lineno

        # pass the context along so that the component sees the calling template's
        # variables (including the request)
        args = [parser.parse_expression(), nodes.ContextReference()]
        body = parser.parse_statements(("name:endcomponent",), drop_needle=True)

        return nodes.CallBlock(
            self.call_method("_render_component", args), [], [], body
        ).set_lineno(lineno)

    def _render_component(self, component, context, caller):
        html = render_component(
            component,
            context.get_all(),
            content=lambda parent_context: caller(),
        )
        return _as_output(context, html)


# Nicer import names
components = ComponentExtension
