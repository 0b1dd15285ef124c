import logging
import time
from typing import Any, Dict, List, Literal, Optional, Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from riskfusion.analysis.tuning import analyze_duplicate_detection
from riskfusion.audit.errors import InvalidOverrideTarget, OverrideDisabled
from riskfusion.audit.override import restore_risk
from riskfusion.config.duplication_config import (
    PRESETS,
    DuplicationConfig,
    UnknownPresetError,
    config_overrides,
)
from riskfusion.config.settings import load_default_config
from riskfusion.export.report import render_text_report
from riskfusion.export.serializer import export_fusion_result
from riskfusion.fusion.fuse_risks import fuse_risks
from riskfusion.models.fusion_result import FusionResult
from riskfusion.models.risk import Risk, RiskSource
from riskfusion.samples import SAMPLE_MODEL_RISKS, SAMPLE_RULE_BASED_RISKS
from riskfusion.telemetry import (
    emit_exception_telemetry,
    emit_fusion_telemetry,
    emit_override_telemetry,
    init_telemetry,
)

# --- AUDIT LOGGING ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
audit_logger = logging.getLogger("riskfusion.api")

tags_metadata = [
    {
        "name": "Fusion",
        "description": "Merges **rule-based** and **model-generated** risks into one de-duplicated list.",
    },
    {
        "name": "Audit",
        "description": "Manual overrides, text reports and duplicate-detection diagnostics.",
    },
    {
        "name": "System",
        "description": "Health checks, presets and sample data.",
    },
]

app = FastAPI(
    title="Risk Fusion Engine",
    description="""
    **Risk Fusion & Deduplication** for contract review.

    * **Rule-based risks** are authoritative and always kept.
    * **Model-generated risks** are dropped when they duplicate a rule-based risk.
    * **Audit trail** explains every keep/drop decision; reviewers can restore dropped risks.
    """,
    version="1.0.0",
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc"
)

init_telemetry()


@app.middleware("http")
async def audit_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client_host = request.client.host if request.client else "unknown"
    audit_logger.info(
        f"METHOD={request.method} PATH={request.url.path} "
        f"STATUS={response.status_code} CLIENT={client_host} "
        f"DURATION={process_time:.4f}s"
    )
    return response


# --- DATA MODELS ---
class RiskModel(BaseModel):
    id: Union[int, str]
    title: str
    description: str = ""
    severity: Literal["high", "medium", "low"]
    category: str = ""
    recommendation: str = ""
    source: Optional[str] = None
    clauseLocation: Optional[str] = None
    relatedText: Optional[str] = None


class ConfigModel(BaseModel):
    similarityThreshold: Optional[float] = None
    titleWeight: Optional[float] = None
    descriptionWeight: Optional[float] = None
    categoryWeight: Optional[float] = None
    # Older clients send enableManualOverrides; allowManualOverride wins if both are set
    enableManualOverrides: Optional[bool] = None
    allowManualOverride: Optional[bool] = None


class FuseRequest(BaseModel):
    ruleBasedRisks: List[RiskModel] = []
    modelRisks: List[RiskModel] = []
    config: Optional[ConfigModel] = None
    preset: Optional[str] = None


class RestoreRequest(FuseRequest):
    restoredRiskIds: List[Union[int, str]] = []


class ReportRequest(FuseRequest):
    restoredRiskIds: List[Union[int, str]] = []


# --- ADAPTERS ---
def _to_risks(models: List[RiskModel], role: RiskSource) -> List[Risk]:
    seen = set()
    for m in models:
        key = str(m.id)
        if key in seen:
            raise ValueError(f"Duplicate {role.value} risk id '{key}'")
        seen.add(key)
    return [Risk.from_dict(m.model_dump(), default_source=role) for m in models]


def _resolve_config(request: FuseRequest) -> DuplicationConfig:
    overrides = config_overrides(request.config.model_dump()) if request.config else {}

    if request.preset:
        return DuplicationConfig.from_preset(request.preset, **overrides)
    if request.config is not None:
        return DuplicationConfig(**overrides)
    return load_default_config()


def _run_fusion(request: FuseRequest) -> FusionResult:
    start_time = time.perf_counter()

    rule_based = _to_risks(request.ruleBasedRisks, RiskSource.RULE_BASED)
    model_generated = _to_risks(request.modelRisks, RiskSource.MODEL_GENERATED)
    config = _resolve_config(request)

    result = fuse_risks(rule_based, model_generated, config)

    emit_fusion_telemetry(
        fusion_latency_ms=int((time.perf_counter() - start_time) * 1000),
        model_risk_count=len(model_generated),
        removed_count=result.statistics.removed_count,
        similarity_threshold=float(config.similarity_threshold),
    )
    return result


def _apply_restores(result: FusionResult, risk_ids: List[Union[int, str]]) -> FusionResult:
    for risk_id in risk_ids:
        try:
            result = restore_risk(result, risk_id)
        except OverrideDisabled:
            emit_override_telemetry("disabled")
            raise
        except InvalidOverrideTarget:
            emit_override_telemetry("rejected")
            raise
        emit_override_telemetry("restored")
    return result


def _handle(action):
    """
    Runs an endpoint body, mapping engine errors to HTTP status codes.
    """
    try:
        return action()
    except OverrideDisabled as e:
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidOverrideTarget as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UnknownPresetError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except Exception as e:
        emit_exception_telemetry(e)
        audit_logger.error(f"ENGINE_ERROR: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail="Risk fusion failed")


# --- ENDPOINTS ---

@app.post("/fuse", tags=["Fusion"])
def fuse_endpoint(request: FuseRequest) -> Dict[str, Any]:
    """
    Fuse rule-based and model-generated risks and return the audit export.
    """
    return _handle(lambda: export_fusion_result(_run_fusion(request)))


@app.post("/restore", tags=["Audit"])
def restore_endpoint(request: RestoreRequest) -> Dict[str, Any]:
    """
    Re-fuse and apply the listed manual restores in order.
    """
    return _handle(
        lambda: export_fusion_result(_apply_restores(_run_fusion(request), request.restoredRiskIds))
    )


@app.post("/report", response_class=PlainTextResponse, tags=["Audit"])
def report_endpoint(request: ReportRequest) -> str:
    return _handle(
        lambda: render_text_report(_apply_restores(_run_fusion(request), request.restoredRiskIds))
    )


@app.post("/analysis", tags=["Audit"])
def analysis_endpoint(request: FuseRequest) -> Dict[str, Any]:
    """
    Duplicate-detection diagnostics and threshold recommendations.
    """
    return _handle(lambda: analyze_duplicate_detection(_run_fusion(request)).to_dict())


@app.get("/presets", tags=["System"])
def presets() -> Dict[str, Any]:
    return {
        name: DuplicationConfig.from_preset(name).to_dict()
        for name in PRESETS
    }


@app.get("/sample", tags=["System"])
def sample() -> Dict[str, Any]:
    return {
        "ruleBasedRisks": [r.to_dict() for r in SAMPLE_RULE_BASED_RISKS],
        "modelRisks": [r.to_dict() for r in SAMPLE_MODEL_RISKS],
        "config": DuplicationConfig().to_dict(),
    }


@app.get("/health", tags=["System"])
def health():
    return {
        "status": "online",
        "modules": ["Scorer", "Classifier", "Fusion", "Override", "AuditExport"]
    }
