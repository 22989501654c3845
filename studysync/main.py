import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI

from studysync.database import Base, engine
from studysync.routes import (
    admin, assignments, calendar, checklist, planner, progress, reports, timetable, topic_plans, users
)

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title="StudySync API",
    description="Assignments, deadline reminders and a weekly study planner with JWT Bearer authentication",
    version="1.0.0"
)

# Include routers
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(assignments.router, prefix="/assignments", tags=["assignments"])
app.include_router(checklist.router, prefix="/checklist", tags=["checklist"])
app.include_router(timetable.router, prefix="/timetable", tags=["timetable"])
app.include_router(planner.router, prefix="/planner", tags=["planner"])
app.include_router(topic_plans.router, prefix="/topic-plans", tags=["topic-plans"])
app.include_router(calendar.router, prefix="/calendar", tags=["calendar"])
app.include_router(progress.router, prefix="/progress", tags=["progress"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to StudySync API",
        "version": "1.0.0",
        "features": [
            "JWT Bearer Authentication with refresh tokens",
            "Assignments with due-soon flags and deadline reminders",
            "Capacity-aware weekly planner",
            "Topic plans with weighted steps",
            "Calendar export and share codes"
        ],
        "endpoints": {
            "register": "POST /users/register - Create a new user",
            "login": "POST /users/login - Login with username and password",
            "refresh": "POST /users/refresh - Refresh access token",
            "assignments": "CRUD /assignments/* - Assignment management",
            "planner": "POST /planner/plan-week - Place open assignments into the week",
            "topic_plans": "POST /topic-plans/ - Generate a study plan for a topic",
            "calendar": "GET /calendar/export.ics - Download deadlines"
        },
        "authentication": "Bearer token in Authorization header",
        "swagger_ui": "/docs - Interactive API documentation",
        "redoc": "/redoc - Alternative API documentation"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

# This allows running the app directly with: python -m studysync.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("studysync.main:app", host="0.0.0.0", port=8000, reload=True)
