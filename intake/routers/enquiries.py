import json
import logging
import re
from typing import Any, Dict, Iterable, Tuple

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from intake.deps import get_normalizer, get_store
from intake.normalizers import Normalizer
from intake.repositories import EnquiryStore
from intake.schemas import EnquiryResponse, ErrorResponse, SubmitResponse

log = logging.getLogger(__name__)

# --------------------------------------------------------------------
# Router setup
# --------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["enquiries"])

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")
_BRACKETED = re.compile(r"^([^\[\]]+)\[([^\[\]]*)\]$")   # name[] or name[key]


def _put(d: Dict[str, Any], key: str, value: Any) -> None:
    """Repeated keys accumulate into a list."""
    if key not in d:
        d[key] = value
    elif isinstance(d[key], list):
        d[key].append(value)
    else:
        d[key] = [d[key], value]


def unflatten_form(items: Iterable[Tuple[str, Any]]) -> Dict[str, Any]:
    """
    Turn decoded form fields into the same shape a JSON client would send:
      activities=Rugby&activities=Hockey  -> {"activities": ["Rugby", "Hockey"]}
      activities[]=Rugby                  -> {"activities": ["Rugby"]}
      priorities[academic]=3              -> {"priorities": {"academic": "3"}}
    File uploads are ignored.
    """
    out: Dict[str, Any] = {}
    for key, value in items:
        if not isinstance(value, str):
            continue
        m = _BRACKETED.match(key)
        if not m:
            _put(out, key, value)
            continue
        name, sub = m.groups()
        if sub == "":
            cur = out.get(name)
            if not isinstance(cur, list):
                cur = out[name] = [] if cur is None else [cur]
            cur.append(value)
        else:
            nested = out.get(name)
            if not isinstance(nested, dict):
                nested = out[name] = {}
            _put(nested, sub, value)
    return out


async def read_payload(request: Request) -> Dict[str, Any]:
    """
    Decode the body as form fields or JSON. Anything undecodable, or a JSON
    value that isn't an object, becomes {} and is left to the normalizer's
    defaults.
    """
    ctype = request.headers.get("content-type", "").lower()
    try:
        if ctype.startswith(_FORM_TYPES):
            form = await request.form()
            return unflatten_form(form.multi_items())
        body = await request.body()
        data = json.loads(body) if body.strip() else {}
    except Exception as e:
        log.warning("undecodable enquiry body (content-type=%r): %s", ctype, e)
        return {}
    if not isinstance(data, dict):
        log.warning("enquiry body is %s, not an object; ignoring it", type(data).__name__)
        return {}
    return data


@router.post("/submit-enquiry", response_model=SubmitResponse,
             responses={500: {"model": ErrorResponse}})
async def submit_enquiry(
    request: Request,
    store: EnquiryStore = Depends(get_store),
    normalizer: Normalizer = Depends(get_normalizer),
):
    """
    Accept an enquiry form (JSON or form-encoded), normalize it and store it.

    Response JSON:
      {"success": true, "enquiryId": "<id>", "prospectusURL": "/prospectus?id=<id>"}

    Store failures surface as 500 {"success": false, "error": ...} via the
    handlers registered in intake.main.
    """
    raw = await read_payload(request)
    log.debug("raw enquiry: %s", raw)

    record = normalizer.normalize(raw)
    log.debug("normalized enquiry: %s", record.to_json())

    enquiry_id = await run_in_threadpool(store.create, record)
    log.info("new enquiry: id=%s stage=%s interests=%s",
             enquiry_id, record.stage, ", ".join(record.academic_interests) or "-")

    return {
        "success": True,
        "enquiryId": enquiry_id,
        "prospectusURL": f"/prospectus?id={enquiry_id}",
    }


@router.get("/enquiry/{enquiry_id}", response_model=EnquiryResponse,
            responses={404: {"model": ErrorResponse}})
def get_enquiry(enquiry_id: str, store: EnquiryStore = Depends(get_store)):
    """Full normalized record for the prospectus page. 404 when unknown."""
    return {"success": True, "data": store.get(enquiry_id)}
