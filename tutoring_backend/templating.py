import os

from fastapi.templating import Jinja2Templates

from tutoring_backend.config import settings
from tutoring_backend.schemas import or_not_specified

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Jinja2Templates turns autoescaping on, so stored form values are safe to embed
templates = Jinja2Templates(directory=os.path.join(BASE_DIR, "templates"))
templates.env.filters["or_not_specified"] = or_not_specified
templates.env.globals["business_name"] = settings.BUSINESS_NAME


def render(name: str, **context) -> str:
    return templates.get_template(name).render(**context)
