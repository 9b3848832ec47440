"""
awards_backend/routes/__init__.py
Route registration
"""
from fastapi import APIRouter
from awards_backend.routes import judge_automation

router = APIRouter()

router.include_router(judge_automation.router)
