from httpdaemon.constants import CODE_OK


def handle_help_route(request):
    """Return a list of all available HTTP routes with their docstrings."""
    registry = request.controller.registry
    help_data = [
        {'path': binding.path, 'method': binding.method, 'description': binding.description}
        for binding in registry
    ]
    return help_data, '', CODE_OK


ROUTES = [
    ('/help', 'GET', handle_help_route),
]
