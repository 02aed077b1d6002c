"""
FastAPI routers grouped by domain (accounts, habits).

Each module exposes an APIRouter included by the application factory in
app.py. Routers resolve their service from ``app.state``.
"""
