# orders/urls/__init__.py

"""
Two URL modules, mounted separately in backend/urls.py:

- orders.urls.admin     -> /api/orders/
- orders.urls.customer  -> /api/customer/orders/
"""
