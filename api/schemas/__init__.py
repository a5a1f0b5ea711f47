"""
API Schemas - Pydantic models for request/response validation

These schemas define the contract between the site and the admin editor.
The menu document itself is described by mugo_menu.menu.schema.
"""
