from django.template import Context, Template, TemplateSyntaxError
from django.test import SimpleTestCase
from django.utils.safestring import SafeString

from viewcomponents.components import Component
from viewcomponents.exceptions import ComponentValidationError
from viewcomponents.rendering import render_component
from viewcomponents.test.testapp.components.greeting import Greeting
from viewcomponents.test.testapp.components.link import ProductLink
from viewcomponents.test.testapp.components.state import State


class ThemedButton(Component):
    template = '<button class="{{ theme }}">{{ label }}</button>'

    def __init__(self, label):
        self.label = label

    def get_context_data(self, parent_context=None):
        context = super().get_context_data(parent_context)
        context["theme"] = parent_context.get("theme", "plain")
        return context


class LegacyComponent:
    """A component that only knows how to render_html, wagtail style."""

    def __init__(self, html):
        self.html = html

    def render_html(self, parent_context=None):
        return self.html


class TestComponentTag(SimpleTestCase):
    def render(self, template_string, context=None):
        template = Template("{% load viewcomponents_tags %}" + template_string)
        return template.render(Context(context or {}))

    def test_component(self):
        html = self.render(
            "{% component link %}",
            {"link": ProductLink(slug="red-hat", label="Red Hat")},
        )

        self.assertHTMLEqual(html, '<a href="/shop/products/red-hat/">Red Hat</a>')

    def test_component_block(self):
        html = self.render(
            "{% component_block greeting %}world{% endcomponent_block %}",
            {"greeting": Greeting(title="greeting")},
        )

        self.assertEqual(html, '<span title="greeting">Hello, world!</span>')

    def test_component_block_renders_body_in_calling_context(self):
        html = self.render(
            "{% component_block badge %}{{ label }}{% endcomponent_block %}",
            {"badge": State(color="green", title="Open"), "label": "<Open>"},
        )

        # escaped once, by the calling template
        self.assertHTMLEqual(
            html, '<span title="Open" class="State State--green">&lt;Open&gt;</span>'
        )

    def test_component_block_body_with_isolated_context(self):
        html = self.render(
            "{% component_block greeting only %}{{ name }}{% endcomponent_block %}",
            {"greeting": Greeting(title="greeting"), "name": "world"},
        )

        self.assertEqual(html, '<span title="greeting">Hello, world!</span>')

    def test_validation_error_propagates(self):
        with self.assertRaises(ComponentValidationError):
            self.render("{% component badge %}", {"badge": State(color="red", title="Closed")})

    def test_with(self):
        html = self.render(
            '{% component button with theme="primary" %}',
            {"button": ThemedButton(label="Save"), "theme": "secondary"},
        )

        self.assertHTMLEqual(html, '<button class="primary">Save</button>')

    def test_parent_context_is_passed(self):
        html = self.render(
            "{% component button %}",
            {"button": ThemedButton(label="Save"), "theme": "secondary"},
        )

        self.assertHTMLEqual(html, '<button class="secondary">Save</button>')

    def test_only(self):
        html = self.render(
            "{% component button only %}",
            {"button": ThemedButton(label="Save"), "theme": "secondary"},
        )

        self.assertHTMLEqual(html, '<button class="plain">Save</button>')

    def test_as(self):
        html = self.render(
            "{% component button as rendered %}<div>{{ rendered }}</div>",
            {"button": ThemedButton(label="Save")},
        )

        self.assertHTMLEqual(html, '<div><button class="plain">Save</button></div>')

    def test_render_html_fallback(self):
        html = self.render(
            "{% component legacy %}",
            {"legacy": LegacyComponent(SafeString("<hr>"))},
        )

        self.assertEqual(html, "<hr>")

    def test_unsafe_output_is_escaped(self):
        html = self.render("{% component legacy %}", {"legacy": LegacyComponent("<hr>")})

        self.assertEqual(html, "&lt;hr&gt;")

    def test_not_a_component(self):
        with self.assertRaisesMessage(ValueError, "Cannot render"):
            self.render("{% component thing %}", {"thing": "just a string"})

    def test_requires_component(self):
        with self.assertRaises(TemplateSyntaxError):
            self.render("{% component %}")

    def test_unknown_argument(self):
        with self.assertRaisesMessage(TemplateSyntaxError, "unknown argument: 'bogus'"):
            self.render("{% component button bogus %}")

    def test_as_without_variable(self):
        with self.assertRaises(TemplateSyntaxError):
            self.render("{% component button as %}")

    def test_component_block_requires_end_tag(self):
        with self.assertRaises(TemplateSyntaxError):
            self.render("{% component_block greeting %}world")


class TestRenderComponent(SimpleTestCase):
    def test_content_for_render_html_only_component(self):
        with self.assertRaisesMessage(ValueError, "does not accept block content"):
            render_component(LegacyComponent("<hr>"), content="x")

    def test_render_in(self):
        html = render_component(Greeting(title="greeting"), Context(), content="world")

        self.assertEqual(html, '<span title="greeting">Hello, world!</span>')
