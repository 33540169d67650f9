from httpdaemon.constants import CODE_MISSING_PARAMETER, CODE_OK
from httpdaemon.daemon.dispatcher import validate_params
from httpdaemon.library.exceptions import MissingParameterError


def handle_echo_route(request):
    """Echo the `msg` parameter back along with every parsed parameter."""
    try:
        validate_params(['msg'], request.params)
    except MissingParameterError as e:
        return {}, str(e), CODE_MISSING_PARAMETER

    body = {
        'msg': request.param('msg'),
        'params': request.params,
    }
    return body, '', CODE_OK


ROUTES = [
    ('/echo', 'GET', handle_echo_route),
    ('/echo', 'POST', handle_echo_route),
]
