"""Mailhub HTTP API (FastAPI)

Components:
    main.py: Application, CORS, error handlers, health check
    models.py: Request/response models
    dependencies.py: Access token and per-request service dependencies
    routes/: Gmail, Calendar, Drive, Docs, Sheets, Forms and AI routers
"""
