from django import template
from django.template.base import token_kwargs
from django.utils.html import conditional_escape
from django.utils.safestring import SafeString

from viewcomponents.rendering import render_component

register = template.Library()


class ComponentNode(template.Node):
    """
    Renders a component, passing it the calling template's context.

    When the tag has a body (``{% component_block %}``), the body is rendered in the
    calling template's context and handed to the component as its content.
    """

    def __init__(
        self,
        component,
        nodelist=None,
        extra_context=None,
        isolated_context=False,
        target_var=None,
    ):
        self.component = component
        self.nodelist = nodelist
        self.extra_context = extra_context or {}
        self.isolated_context = isolated_context
        self.target_var = target_var

    def get_content(self, context):
        if self.nodelist is None:
            return None

        def content(parent_context):
            return self.nodelist.render(context)

        return content

    def render(self, context):
        component = self.component.resolve(context)
        values = {name: var.resolve(context) for name, var in self.extra_context.items()}
        content = self.get_content(context)

        if self.isolated_context:
            html = render_component(component, context.new(values), content=content)
        else:
            with context.push(**values):
                html = render_component(component, context, content=content)

        if self.target_var:
            context[self.target_var] = html
            return SafeString("")

        if context.autoescape:
            html = conditional_escape(html)
        return html


def parse_component_tag(parser, token, nodelist_end=None):
    tag_name, *bits = token.split_contents()
    if not bits:
        raise template.TemplateSyntaxError(
            "'%s' tag requires at least one argument, the component object" % tag_name
        )

    component = parser.compile_filter(bits.pop(0))

    extra_context = {}
    isolated_context = False
    target_var = None

    while bits:
        bit = bits.pop(0)
        if bit == "with":
            extra_context = token_kwargs(bits, parser)
            if not extra_context:
                raise template.TemplateSyntaxError(
                    "'%s' tag expected at least one variable assignment after 'with'"
                    % tag_name
                )
        elif bit == "only":
            isolated_context = True
        elif bit == "as":
            try:
                target_var = bits.pop(0)
            except IndexError:
                raise template.TemplateSyntaxError(
                    "'%s' tag with 'as' must be followed by a variable name" % tag_name
                )
        else:
            raise template.TemplateSyntaxError(
                "'%s' tag received an unknown argument: %r" % (tag_name, bit)
            )

    nodelist = None
    if nodelist_end:
        nodelist = parser.parse((nodelist_end,))
        parser.delete_first_token()

    return ComponentNode(
        component,
        nodelist=nodelist,
        extra_context=extra_context,
        isolated_context=isolated_context,
        target_var=target_var,
    )


@register.tag(name="component")
def component(parser, token):
    """
    Render a component without content.

    Usage:
        {% component my_component %}
        {% component my_component with title="Hello" %}
        {% component my_component only %}
        {% component my_component as rendered %}

    ``with`` adds variables to the context passed to the component, ``only``
    passes no context but those, and ``as`` stores the output in a variable
    instead of emitting it.
    """
    return parse_component_tag(parser, token)


@register.tag(name="component_block")
def component_block(parser, token):
    """
    Render a component, passing the tag's body as its content.

    Usage:
        {% component_block my_component %}
            Hello, {{ name }}!
        {% endcomponent_block %}

    Accepts the same ``with`` / ``only`` / ``as`` options as ``{% component %}``.
    The body is always rendered in the calling template's context.
    """
    return parse_component_tag(parser, token, nodelist_end="endcomponent_block")
