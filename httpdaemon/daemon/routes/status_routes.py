from httpdaemon.constants import CODE_OK


def handle_status_route(request):
    """Respond with the daemon's current running state."""
    controller = request.controller
    body = {
        'running': bool(controller and controller.running),
        'routes': len(controller.registry) if controller else 0,
    }
    return body, '', CODE_OK


# Each entry binds a path and HTTP method to the function that serves it.
# These routes are discovered and registered at startup to enable automatic
# dispatching and documentation (e.g., via the /help route).
ROUTES = [
    ('/status', 'GET', handle_status_route),
]
