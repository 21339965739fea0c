# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.database import Base, engine
from app.routers import auth, staff, admin_course, admin_staff, admin_student, admin_schedule, attendance

import time
import logging
from fastapi import Request
from app.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("app")


# create tables if missing
Base.metadata.create_all(bind=engine)

app = FastAPI(title="School Admin Backend", version="1.0.0")

# CORS
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth.router)
app.include_router(staff.router)
app.include_router(admin_course.router)
app.include_router(admin_staff.router)
app.include_router(admin_student.router)
app.include_router(admin_schedule.router)
app.include_router(attendance.router)

@app.get("/")
def root():
    return {"message": "School admin backend is running!"}
