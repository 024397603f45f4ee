def get_context_request(context):
    """
    Return the request a template context was rendered with, or None.

    A ``RequestContext`` carries the request as an attribute whether or not the
    ``request`` context processor is enabled; plain dicts and Jinja2 contexts only
    have it as the ``request`` variable.
    """
    if context is None:
        return None

    request = getattr(context, "request", None)
    if request is None:
        request = context.get("request")
    return request
