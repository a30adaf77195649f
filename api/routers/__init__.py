"""
FastAPI routers grouped por domínio (cards, users, health).

Each file exposes an APIRouter included by `api.app.create_app` under the
configured API prefix. Routers translate service results into HTTP responses.
"""
