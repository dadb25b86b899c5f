from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import os, logging

from order_analytics.db.session import bootstrap_db

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(title="Order Analytics API", version="0.1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ALLOW_ORIGINS", "*").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Health check
@app.get("/api/health")
def health():
    return {"status": "ok"}

# ===== Tables must exist before the first analytics query =====
bootstrap_db()

# ===== Routers (fail fast: a missing analytics router is a broken deployment) =====
from order_analytics.api.orders import router as orders_router  # noqa: E402
from order_analytics.api.sales import router as sales_router  # noqa: E402
from order_analytics.api.marketing import router as marketing_router  # noqa: E402
from order_analytics.api.date_ranges import router as date_ranges_router  # noqa: E402

for _router in (orders_router, sales_router, marketing_router, date_ranges_router):
    app.include_router(_router)
    logging.info("Mounted router: %s", _router.prefix or _router.tags)
