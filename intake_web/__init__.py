"""
FastAPI surface for the document intake service.

Build the application with ``intake_web.main.create_app``; routers:
- intake_web.auth_routes.router    (/api/signup, /api/login)
- intake_web.upload_routes.router  (/api/upload, /api/documents, /api/document-fields)
"""
