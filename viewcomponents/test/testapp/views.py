from django.http import HttpResponse
from django.template import engines

from viewcomponents.test.testapp.components.link import ProductLink
from viewcomponents.test.testapp.components.state import State


def state_badge(request):
    template = engines["django"].from_string(
        "{% load viewcomponents_tags %}"
        "{% component_block badge %}{{ request.GET.label }}{% endcomponent_block %}"
    )
    badge = State(color=request.GET.get("color", "default"), title="Status")
    return HttpResponse(template.render({"badge": badge}, request=request))


def product_link(request, slug):
    template = engines["django"].from_string(
        "{% load viewcomponents_tags %}{% component link %}"
    )
    return HttpResponse(
        template.render({"link": ProductLink(slug=slug, label=slug.title())}, request=request)
    )
