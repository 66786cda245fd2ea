"""
Space Facts API - Routes Package
=================================

Route Inventory:
    - health.py:   GET  /                         (text banner)
                   GET  /health                   (database health check)
    - planets.py:  GET/POST        /planets
                   GET/PUT/DELETE  /planets/{id}
    - photos.py:   POST /planets/{id}/photo       (multipart upload)
                   GET  /planets/photos/{filename} (stored photo)

Routes stay thin: extract parameters, call the repository or photo storage,
shape the response. Error bodies are built by the handlers in main.py.
"""
