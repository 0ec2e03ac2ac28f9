import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Load environment variables
load_dotenv()

from mermaidgen.api import diagram
from mermaidgen.config import get_settings

settings = get_settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # The genai SDK logs every HTTP call at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


configure_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(title=settings.app_name, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [error["msg"] for error in exc.errors()]
    return JSONResponse(
        status_code=400,
        content={"detail": {"error": "Validation failed", "details": details}},
    )


# Include routers
app.include_router(diagram.router, prefix="/api/diagrams", tags=["Diagrams"])


@app.get("/")
async def root():
    return {"message": "Welcome to the Mermaid Diagram Generator", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "version": "1.0.0"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mermaidgen.main:app", host="0.0.0.0", port=settings.port, reload=True)
