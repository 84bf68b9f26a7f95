"""
Agora HTTP API

A thin FastAPI surface over the action layer. Handlers translate the
response envelope into an HTTP status code and nothing else.
"""
