# clinicdesk/decorators/auth.py
from functools import wraps

from flask_login import current_user

from clinicdesk.services import get_repository


def owned_resource(collection, url_arg, as_arg):
    """Resolve ``url_arg`` to a record the current user owns and pass it as ``as_arg``.

    Answers 404 when the id is unknown and 403 when it belongs to someone
    else, before the view body runs. Must sit under ``login_required``.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            record_id = kwargs.pop(url_arg)
            kwargs[as_arg] = get_repository().get_owned(collection, record_id, current_user.id)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
