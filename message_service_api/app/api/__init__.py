"""
HTTP layer of the message service.

``router.py`` aggregates the endpoint routers, ``responses.py`` holds
the response builders shared by all endpoints.
"""
