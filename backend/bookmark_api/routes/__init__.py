# Routes package init
"""
Bookmarks API — Routes Package
===============================

Route Inventory:
    - bookmarks.py:  GET/POST    {prefix}
                     GET/PATCH/DELETE {prefix}/{id}
    - health.py:     GET /health

Routes stay THIN: pull data from the request, call the service, set the
status code and headers. Rules live in services/.
"""
