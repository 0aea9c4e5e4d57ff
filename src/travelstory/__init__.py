"""Travel Story - a travel journal API.

Users record travel stories (title, narrative, visited locations, a photo and
a visit date), mark favourites, and share stories with other users as
collaborators.

Quick Start:
    uvicorn travelstory.api.main:app

Layers:
    models    SQLAlchemy models and the Database lifecycle object
    services  Story use cases, access control and collaborator management
    api       FastAPI routers, dependencies and error handlers
"""

__version__ = "0.1.0"
