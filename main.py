from fastapi import FastAPI, HTTPException, Depends, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from typing import List
import logging

from config import settings
from models import RoleEnum
import crud
import schemas
from database import (
    get_db, get_store, verify_tables_exist, assessment_to_profile,
    fetch_careers, fetch_courses, RecordStore,
)
from gemini_client import GeminiClient, get_gemini_client
from resume_analysis import analyze_resume
from service import generate_smart_response, build_recommendations

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(title="Career Guidance Backend")

# Ensure database tables exist on startup
@app.on_event("startup")
def startup_event():
    settings.validate()
    verify_tables_exist()

# Global Custom Error Handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Convert 422 to 400 for frontend compatibility."""
    return JSONResponse(
        status_code=400,
        content={"error": "VALIDATION_ERROR", "message": f"Invalid data format: {str(exc)}"},
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions."""
    logger.exception(f"Global Error: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_SERVER_ERROR", "message": "An unexpected error occurred. Please try again."},
    )

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

def _assessment_response(assessment) -> schemas.AssessmentResponse:
    profile = assessment_to_profile({c.key: getattr(assessment, c.key) for c in assessment.__table__.columns})
    return schemas.AssessmentResponse(
        user_id=assessment.user_id,
        updated_at=assessment.updated_at,
        **profile.model_dump()
    )

# ============================================
# ENDPOINTS
# ============================================

@app.get("/")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "career-guidance-backend"}

# ---------- Assessment ----------

@app.post("/assessment", response_model=schemas.AssessmentResponse)
def submit_assessment(
    submission: schemas.AssessmentCreate,
    db: Session = Depends(get_db)
):
    """
    Save an assessment.
    A resubmission replaces the previous one entirely.
    """
    logger.info(f"[ENDPOINT] /assessment called for {submission.user_id}")

    try:
        profile = schemas.Profile(**submission.model_dump(exclude={"user_id"}))
        assessment = crud.save_assessment(db, submission.user_id, profile)
    except Exception as e:
        logger.error(f"[ERROR] Assessment save failed: {str(e)}")
        raise HTTPException(status_code=400, detail=f"Failed to save assessment: {str(e)}")

    return _assessment_response(assessment)

@app.get("/assessment/{user_id}", response_model=schemas.AssessmentResponse)
def get_assessment(user_id: str, db: Session = Depends(get_db)):
    assessment = crud.get_assessment(db, user_id)
    if not assessment:
        raise HTTPException(status_code=404, detail="Assessment not found")
    return _assessment_response(assessment)

@app.delete("/assessment/{user_id}", response_model=schemas.SaveResponse)
def reset_assessment(user_id: str, db: Session = Depends(get_db)):
    """Reset a user's assessment."""
    if not crud.reset_assessment(db, user_id):
        raise HTTPException(status_code=404, detail="Assessment not found")
    return schemas.SaveResponse(success=True, message="Assessment reset")

# ---------- Catalogs ----------

@app.get("/careers", response_model=List[schemas.Career])
def list_careers(db: Session = Depends(get_db)):
    return crud.get_careers(db)

@app.get("/courses", response_model=List[schemas.Course])
def list_courses(db: Session = Depends(get_db)):
    return crud.get_courses(db)

@app.get("/recommendations/{user_id}", response_model=schemas.RecommendationsResponse)
def get_recommendations(
    user_id: str,
    db: Session = Depends(get_db),
    store: RecordStore = Depends(get_store),
):
    """
    Top careers and courses for a user.
    Returns 404 if the user has no assessment.
    Returns empty arrays if nothing matches (NOT an error).
    """
    logger.info(f"[ENDPOINT] /recommendations called for {user_id}")

    assessment = crud.get_assessment(db, user_id)
    if not assessment:
        raise HTTPException(status_code=404, detail="Assessment not found. Please complete your assessment.")

    profile = _assessment_response(assessment)
    # Insertion order, as the assistant reads them
    careers = fetch_careers(store)
    courses = fetch_courses(store)

    recommendations = build_recommendations(profile, careers, courses)
    logger.info(
        f"[SUCCESS] Returning {len(recommendations.careers)} careers, {len(recommendations.courses)} courses"
    )
    return recommendations

# ---------- Saved items ----------

@app.get("/users/{user_id}/saved-careers", response_model=List[schemas.Career])
def saved_careers(user_id: str, db: Session = Depends(get_db)):
    return crud.get_saved_careers(db, user_id)

@app.post("/users/{user_id}/saved-careers/{career_id}", response_model=schemas.SaveResponse)
def save_career(user_id: str, career_id: str, db: Session = Depends(get_db)):
    if not crud.get_career(db, career_id):
        raise HTTPException(status_code=404, detail="Career not found")
    crud.save_career(db, user_id, career_id)
    return schemas.SaveResponse(success=True, message="Career saved")

@app.delete("/users/{user_id}/saved-careers/{career_id}", response_model=schemas.SaveResponse)
def unsave_career(user_id: str, career_id: str, db: Session = Depends(get_db)):
    if not crud.unsave_career(db, user_id, career_id):
        raise HTTPException(status_code=404, detail="Career not saved")
    return schemas.SaveResponse(success=True, message="Career removed")

@app.get("/users/{user_id}/saved-courses", response_model=List[schemas.Course])
def saved_courses(user_id: str, db: Session = Depends(get_db)):
    return crud.get_saved_courses(db, user_id)

@app.post("/users/{user_id}/saved-courses/{course_id}", response_model=schemas.SaveResponse)
def save_course(user_id: str, course_id: str, db: Session = Depends(get_db)):
    if not crud.get_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    crud.save_course(db, user_id, course_id)
    return schemas.SaveResponse(success=True, message="Course saved")

@app.delete("/users/{user_id}/saved-courses/{course_id}", response_model=schemas.SaveResponse)
def unsave_course(user_id: str, course_id: str, db: Session = Depends(get_db)):
    if not crud.unsave_course(db, user_id, course_id):
        raise HTTPException(status_code=404, detail="Course not saved")
    return schemas.SaveResponse(success=True, message="Course removed")

# ---------- User profiles ----------

@app.put("/profiles/{user_id}", response_model=schemas.UserProfileResponse)
def update_profile(user_id: str, data: schemas.UserProfileUpdate, db: Session = Depends(get_db)):
    return crud.create_or_update_profile(db, user_id, data.full_name)

@app.get("/profiles/{user_id}", response_model=schemas.UserProfileResponse)
def get_profile(user_id: str, db: Session = Depends(get_db)):
    profile = crud.get_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    return profile

# ---------- Assistant ----------

@app.post("/assistant", response_model=schemas.AssistantResponse)
async def assistant(
    request: schemas.AssistantRequest,
    store: RecordStore = Depends(get_store)
):
    """
    Rule-based career assistant behind the chat widget.
    Never fails: data problems come back as a friendly message.
    """
    logger.info(f"[ENDPOINT] /assistant called for {request.user_id}")
    message = await generate_smart_response(request.message, request.user_id, store)
    return schemas.AssistantResponse(message=message)

# ---------- Conversations ----------

@app.post("/conversations", response_model=schemas.ConversationResponse)
def create_conversation(data: schemas.ConversationCreate, db: Session = Depends(get_db)):
    return crud.create_conversation(db, data.user_id, data.title)

@app.get("/conversations", response_model=List[schemas.ConversationResponse])
def list_conversations(user_id: str, db: Session = Depends(get_db)):
    return [
        schemas.ConversationResponse(
            id=c.id, title=c.title, created_at=c.created_at, updated_at=c.updated_at
        )
        for c in crud.list_conversations(db, user_id)
    ]

@app.get("/conversations/{conversation_id}", response_model=schemas.ConversationResponse)
def get_conversation(conversation_id: str, user_id: str, db: Session = Depends(get_db)):
    conversation = crud.get_conversation(db, conversation_id, user_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    return conversation

@app.delete("/conversations/{conversation_id}", response_model=schemas.SaveResponse)
def delete_conversation(conversation_id: str, user_id: str, db: Session = Depends(get_db)):
    if not crud.delete_conversation(db, conversation_id, user_id):
        raise HTTPException(status_code=404, detail="Conversation not found")
    return schemas.SaveResponse(success=True, message="Conversation deleted")

@app.post("/conversations/{conversation_id}/messages", response_model=schemas.ConversationResponse)
def send_message(
    conversation_id: str,
    data: schemas.MessageCreate,
    db: Session = Depends(get_db),
    gemini: GeminiClient = Depends(get_gemini_client)
):
    """
    Send a message to the AI counsellor.
    The user message is stored before Gemini is called, the reply only on success.
    """
    logger.info(f"[ENDPOINT] /conversations/{conversation_id}/messages called for {data.user_id}")

    conversation = crud.get_conversation(db, conversation_id, data.user_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="No active conversation")

    if not gemini.is_available():
        raise HTTPException(status_code=503, detail="AI service is not available. Please check your Gemini API key.")

    history = [{"role": m.role.value, "content": m.content} for m in conversation.messages]
    crud.add_message(db, conversation, RoleEnum.USER, data.content)

    reply = gemini.generate_chat_reply(data.content, history)
    if reply.error:
        logger.error(f"[ERROR] Gemini reply failed: {reply.error}")
        raise HTTPException(status_code=502, detail=reply.text)

    crud.add_message(db, conversation, RoleEnum.ASSISTANT, reply.text)
    crud.touch_conversation(db, conversation)

    return crud.get_conversation(db, conversation_id, data.user_id)

# ---------- Resume ----------

@app.post("/resume/analyze", response_model=schemas.ResumeAnalysisResponse)
def resume_analyze(
    request: schemas.ResumeAnalysisRequest,
    gemini: GeminiClient = Depends(get_gemini_client)
):
    logger.info("[ENDPOINT] /resume/analyze called")
    return analyze_resume(request.content, gemini)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
