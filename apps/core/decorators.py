"""
Customer authentication decorator for the JSON endpoints.

Sign-in itself happens elsewhere; these views only need to know who the
acting customer is. Anonymous requests get a 401 JSON body instead of a
redirect so the calling page can start its own sign-in flow.
"""
from functools import wraps
from django.http import JsonResponse


def customer_required(view_func):
    """Require an authenticated user. Respond 401 otherwise."""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse(
                {'error': 'Sign in to continue.', 'code': 'unauthenticated'},
                status=401,
            )
        return view_func(request, *args, **kwargs)
    return wrapper
