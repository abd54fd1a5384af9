# backend -- FastAPI server + relational store for the company graph
#
# Modules:
#   app         -- FastAPI application with lifespan management
#   database    -- SQLite / PostgreSQL async engine
#   models      -- SQLAlchemy ORM models (companies, products, relationships, news)
#   schemas     -- Pydantic request/response schemas (incl. layout input contract)
#   queries     -- read queries shared by routes and the provider
#   errors      -- allow-listed partial updates + IntegrityError -> HTTP mapping
#   provider    -- focus company + related records -> layout input
#   migrate_csv -- CSV -> database import
#   routes/     -- API endpoints (companies, products, relationships, news, graph)
