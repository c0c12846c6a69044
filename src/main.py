"""
TruthSense Headline Checker - API
Classifies news headlines as fake or trustworthy with an explanation
"""

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, field_validator
from typing import Optional, Dict, Any, List
from collections import defaultdict
import asyncio
import logging
import time
import os
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables early so Settings picks them up
load_dotenv()

from truthsense.config import get_settings  # noqa: E402
from truthsense.detector import HeadlineScorer  # noqa: E402
from truthsense.models import ClassificationResult  # noqa: E402


# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('logs/truthsense.log') if os.path.exists('logs') else logging.NullHandler()
    ]
)

logger = logging.getLogger(__name__)

settings = get_settings()
scorer = HeadlineScorer()


# Metrics tracker
class Metrics:
    """Track service metrics"""

    def __init__(self):
        self.total_requests = 0
        self.successful_requests = 0
        self.failed_requests = 0
        self.total_processing_time = 0.0
        self.headlines_classified = 0
        self.start_time = time.time()

    def record_request(self, success: bool, processing_time: float, headlines: int = 0):
        """Record request outcome"""
        self.total_requests += 1
        if success:
            self.successful_requests += 1
            self.headlines_classified += headlines
        else:
            self.failed_requests += 1
        self.total_processing_time += processing_time

    def get_stats(self) -> Dict[str, Any]:
        """Get current metrics"""
        uptime = time.time() - self.start_time
        avg_time = self.total_processing_time / self.total_requests if self.total_requests > 0 else 0

        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "success_rate": f"{(self.successful_requests / self.total_requests * 100):.1f}%" if self.total_requests > 0 else "N/A",
            "average_processing_time": f"{avg_time:.4f}s",
            "headlines_classified": self.headlines_classified,
            "uptime_seconds": int(uptime)
        }


metrics = Metrics()


class RateLimiter:
    """Sliding one-minute request window per client IP"""

    def __init__(self, max_requests_per_minute: int = 60):
        self.max_requests = max_requests_per_minute
        self.requests = defaultdict(list)  # IP -> list of timestamps

    def is_allowed(self, client_ip: str) -> tuple[bool, Optional[str]]:
        """Check if request is allowed"""
        now = time.time()
        minute_ago = now - 60

        self.requests[client_ip] = [
            req_time for req_time in self.requests[client_ip]
            if req_time > minute_ago
        ]

        if len(self.requests[client_ip]) >= self.max_requests:
            wait_time = 60 - (now - self.requests[client_ip][0])
            return False, f"Rate limit exceeded. Try again in {int(wait_time)}s"

        self.requests[client_ip].append(now)
        return True, None

    def get_remaining(self, client_ip: str) -> int:
        """Get remaining requests for IP"""
        minute_ago = time.time() - 60
        recent = [req_time for req_time in self.requests[client_ip] if req_time > minute_ago]
        return max(0, self.max_requests - len(recent))


rate_limiter = RateLimiter(max_requests_per_minute=settings.rate_limit_per_minute)


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.service_title} v{settings.service_version}")
    logger.info("=" * 60)
    logger.info("Configuration loaded:")
    logger.info(f"  Rules: {len(scorer.rules.battery)} detectors")
    logger.info(f"  Rate limit: {settings.rate_limit_per_minute}/min")
    logger.info(f"  Max batch size: {settings.max_batch_size}")
    logger.info(f"  Analysis delay: {settings.analysis_delay_seconds}s")

    yield

    logger.info("Shutdown complete")


# FastAPI application
app = FastAPI(
    title=settings.service_title,
    version=settings.service_version,
    description=settings.service_description,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    metrics.record_request(False, 0.0)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if settings.debug else "An error occurred"
        }
    )


# Request/Response models
class ClassifyRequest(BaseModel):
    """Single headline classification request"""

    headline: str = Field(..., description="Headline to classify; blank input is answered, not rejected")
    debug: bool = Field(False, description="Include the score breakdown")

    @field_validator('headline')
    @classmethod
    def validate_length(cls, v):
        if len(v) > settings.max_headline_length:
            raise ValueError(f'Headline must be at most {settings.max_headline_length} characters')
        return v


class BatchClassifyRequest(BaseModel):
    """Batch classification request"""

    headlines: List[str] = Field(..., min_length=1)

    @field_validator('headlines')
    @classmethod
    def validate_headlines(cls, v):
        if len(v) > settings.max_batch_size:
            raise ValueError(f'At most {settings.max_batch_size} headlines per batch')
        if any(len(h) > settings.max_headline_length for h in v):
            raise ValueError(f'Headlines must be at most {settings.max_headline_length} characters')
        return v


class ClassifyResponse(ClassificationResult):
    """Classification with optional score breakdown"""

    details: Optional[Dict[str, Any]] = None
    processing_time: Optional[float] = None


class BatchClassifyResponse(BaseModel):
    results: List[ClassificationResult]
    count: int
    processing_time: float


def _check_rate_limit(http_request: Request, response: Response) -> str:
    client_ip = http_request.client.host if http_request.client else "unknown"
    allowed, error_msg = rate_limiter.is_allowed(client_ip)
    if not allowed:
        logger.warning(f"Rate limit exceeded for {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=error_msg
        )
    response.headers["X-RateLimit-Remaining"] = str(rate_limiter.get_remaining(client_ip))
    return client_ip


# API endpoints
@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "service": settings.service_title,
        "version": settings.service_version,
        "status": "operational",
        "endpoints": {
            "classify": "POST /classify",
            "batch": "POST /classify/batch",
            "health": "GET /health",
            "metrics": "GET /metrics"
        }
    }


@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "api": "healthy",
            "scorer": "loaded",
            "detectors": len(scorer.rules.battery)
        },
        "metrics": metrics.get_stats()
    }


@app.get("/metrics")
async def get_metrics():
    """Get service metrics"""
    return {
        "service": settings.service_title,
        "version": settings.service_version,
        "metrics": metrics.get_stats()
    }


@app.post("/classify", response_model=ClassifyResponse, response_model_exclude_none=True)
async def classify_headline(request_body: ClassifyRequest, http_request: Request, response: Response):
    """Classify a single headline"""
    client_ip = _check_rate_limit(http_request, response)
    start = time.time()

    # small artificial delay, mirrors the front end's UX pause
    if settings.analysis_delay_seconds > 0:
        await asyncio.sleep(settings.analysis_delay_seconds)

    analysis = scorer.analyze(request_body.headline)
    processing_time = time.time() - start
    metrics.record_request(True, processing_time, headlines=1)

    logger.info(
        f"Classified headline from {client_ip}: {request_body.headline[:50]!r} -> "
        f"{analysis.result.label} ({analysis.result.confidence}%)"
    )

    details = None
    if request_body.debug:
        details = analysis.model_dump(exclude={"result"})

    return ClassifyResponse(
        **analysis.result.model_dump(),
        details=details,
        processing_time=round(processing_time, 4)
    )


@app.post("/classify/batch", response_model=BatchClassifyResponse)
async def classify_batch(request_body: BatchClassifyRequest, http_request: Request, response: Response):
    """Classify headlines in order"""
    client_ip = _check_rate_limit(http_request, response)
    start = time.time()

    results = [scorer.classify(headline) for headline in request_body.headlines]
    processing_time = time.time() - start
    metrics.record_request(True, processing_time, headlines=len(results))

    logger.info(f"Classified batch of {len(results)} headlines from {client_ip}")
    return BatchClassifyResponse(
        results=results,
        count=len(results),
        processing_time=round(processing_time, 4)
    )
