"""
Agora Backend

A small social network: posts, likes, comments, follows and notifications.

Package Structure:
==================
    agora/
    ├── api/        ← FastAPI application (thin HTTP surface)
    ├── shared/     ← Models, repositories, use cases, actions
    └── config/     ← Configuration

Running the Application:
========================
    # API Server
    uvicorn agora.api.main:app --reload
"""
