from datetime import datetime, timezone
from typing import Any, Dict

from applicant_portal.constants import (
    APPLICATION_REVIEW_CYCLE_START_DATE,
    INITIAL_SCORE,
    STATUS_PENDING,
)

# Top-level update keys and the document path each one is written to
FLAT_FIELD_MAP = {
    "image_url": "image_url",
    "found_from": "found_from",
    "role": "role",
    "introduction": "intro.introduction",
    "for_fun": "intro.for_fun",
    "fun_fact": "intro.fun_fact",
    "why_rds": "intro.why_rds",
    "number_of_hours": "intro.number_of_hours",
    "city": "location.city",
    "state": "location.state",
    "country": "location.country",
    "institution": "professional.institution",
    "skills": "professional.skills",
}

PROFESSIONAL_KEYS = ["institution", "skills"]
SOCIAL_LINK_KEYS = [
    "phone_number",
    "github",
    "instagram",
    "linkedin",
    "twitter",
    "peerlist",
    "behance",
    "dribbble",
]


def build_application_document(data: Dict[str, Any], user_id: str, created_at: datetime) -> Dict[str, Any]:
    """Turn a flat creation payload into the nested application document."""
    document = {
        "user_id": user_id,
        "biodata": {
            "first_name": data.get("first_name"),
            "last_name": data.get("last_name"),
        },
        "location": {
            "city": data.get("city"),
            "state": data.get("state"),
            "country": data.get("country"),
        },
        "professional": {
            "institution": data.get("institution"),
            "skills": data.get("skills"),
        },
        "intro": {
            "introduction": data.get("introduction"),
            "fun_fact": data.get("fun_fact"),
            "for_fun": data.get("for_fun"),
            "why_rds": data.get("why_rds"),
            "number_of_hours": data.get("number_of_hours"),
        },
        "found_from": data.get("found_from"),
        "role": data.get("role"),
        "image_url": data.get("image_url"),
        "status": STATUS_PENDING,
        "score": INITIAL_SCORE,
        "nudge_count": 0,
        "created_at": created_at,
        "version": 0,
    }

    social_link = {
        key: value
        for key, value in (data.get("social_link") or {}).items()
        if key in SOCIAL_LINK_KEYS and value is not None
    }
    if social_link:
        document["social_link"] = social_link

    return document


def build_application_update_payload(patch: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten a sparse update into dot-delimited document paths.

    None values are dropped so a partial update never overwrites stored data
    with null. Keys outside the editable set are ignored.
    """
    data_to_update = {}

    for key, path in FLAT_FIELD_MAP.items():
        value = patch.get(key)
        if value is not None:
            data_to_update[path] = value

    professional = patch.get("professional")
    if isinstance(professional, dict):
        for key in PROFESSIONAL_KEYS:
            value = professional.get(key)
            if value is not None:
                data_to_update[f"professional.{key}"] = value

    social_link = patch.get("social_link")
    if isinstance(social_link, dict):
        for key in SOCIAL_LINK_KEYS:
            value = social_link.get(key)
            if value is not None:
                data_to_update[f"social_link.{key}"] = value

    return data_to_update


def is_resubmittable_legacy(application: Dict[str, Any]) -> bool:
    """True for applications from the review cycle before the current one."""
    created_at = application.get("created_at")
    if created_at is None:
        return False
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return created_at < APPLICATION_REVIEW_CYCLE_START_DATE
