"""
Blog API package.

Provides the FastAPI application for the blog backend. The application
object lives in ``api.app`` so feature routers can import the API
dependencies without building the app.
"""
