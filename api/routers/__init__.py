"""
API Routers - HTTP endpoint handlers

Each router handles a specific domain of functionality:
- menu: storefront page, admin preview and menu.json
- save: POST /save-menu (admin only)
- auth: server-side admin credential check
- health: Health checks and system info
"""
