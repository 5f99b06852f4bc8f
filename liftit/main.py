from fastapi import FastAPI

from .error_handlers import register_error_handlers
from .routes import workout

app = FastAPI(title="liftit")

register_error_handlers(app)

app.include_router(workout.router)


@app.get("/health")
def health():
    return {"status": "ok"}
