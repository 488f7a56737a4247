"""
Storefront web layer.

Routers:
- web.auth_routes.router      /api/users
- web.admin_routes.router     /api/admin
- web.product_routes.router   /api/products
- web.checkout_routes.router  /api/create-payment-intent, /api/orders

web.main.create_app() mounts all of them.
"""
