def render_component(component, parent_context=None, content=None, url_helper=None):
    """
    Render ``component`` as called from a template with ``parent_context``.

    Objects providing ``render_in`` (viewcomponents' Component) receive the block
    content; objects that only provide ``render_html`` (wagtail / laces style
    components) are rendered without it.
    """
    if hasattr(component, "render_in"):
        return component.render_in(parent_context, content=content, url_helper=url_helper)

    if hasattr(component, "render_html"):
        if content is not None:
            raise ValueError(
                f"{component!r} does not accept block content; it has no render_in method"
            )
        return component.render_html(parent_context)

    raise ValueError(f"Cannot render {component!r} as a component")
