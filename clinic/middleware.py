class NoStoreApiMiddleware:
    """Disable HTTP caching for every ``/api`` response.

    Stores on the client refetch after each write and must never be
    served a stale list by an intermediate cache.
    """
    PREFIX = '/api/'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        if (request.path or '').startswith(self.PREFIX):
            response['Cache-Control'] = 'no-store, no-cache, must-revalidate, private'
            response['Pragma'] = 'no-cache'
            response['Expires'] = '0'
        return response
