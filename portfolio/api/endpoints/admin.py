# portfolio/api/endpoints/admin.py
# Managers del panel: CRUD por entidad bajo /admin/<entidad>, solo admins.
# Sin `from __future__ import annotations`: FastAPI necesita los tipos reales
# de los schemas que se pasan a cada Manager.
import logging
from typing import List, Type

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from pydantic import BaseModel

from portfolio.api.deps import get_storage, require_admin
from portfolio.core.settings import settings
from portfolio.schemas import blog as blog_schemas
from portfolio.schemas import content as content_schemas
from portfolio.services import blog_service, firebase_storage
from portfolio.services.section_service import SectionContentError, validate_section_content
from portfolio.storage.base import Storage
from portfolio.utils.payload_guard import enforce_content_size

logger = logging.getLogger(__name__)


class Manager:
    """
    List / read / create / partial update / confirmed delete for one table.
    Subclasses hook into ``create_item``, ``update_item`` and ``delete_item``.
    """

    def __init__(
        self,
        path: str,
        table: str,
        out_schema: Type[BaseModel],
        create_schema: Type[BaseModel],
        update_schema: Type[BaseModel],
    ):
        self.path = path
        self.table = table
        self.out_schema = out_schema
        self.create_schema = create_schema
        self.update_schema = update_schema

    # ---------- hooks ----------
    def list_items(self, storage: Storage) -> list:
        return storage.find_all(self.table)

    def create_item(self, storage: Storage, payload: BaseModel):
        return storage.create(self.table, payload)

    def update_item(self, storage: Storage, current: BaseModel, payload: BaseModel):
        return storage.update(self.table, current.id, payload)

    def delete_item(self, storage: Storage, current: BaseModel) -> bool:
        return storage.delete(self.table, current.id)

    # ---------- helpers ----------
    def get_or_404(self, storage: Storage, item_id: int):
        item = storage.find_by_id(self.table, item_id)
        if item is None:
            raise HTTPException(status_code=404, detail=f"{self.path} item {item_id} not found")
        return item

    # ---------- router ----------
    def router(self) -> APIRouter:
        router = APIRouter(prefix=f"/admin/{self.path}", tags=[f"admin:{self.path}"])
        Out, Create, Update = self.out_schema, self.create_schema, self.update_schema

        @router.get("", response_model=List[Out])
        def list_all(storage: Storage = Depends(get_storage)):
            return self.list_items(storage)

        @router.get("/{item_id}", response_model=Out)
        def read_one(item_id: int, storage: Storage = Depends(get_storage)):
            return self.get_or_404(storage, item_id)

        @router.post("", response_model=Out, status_code=status.HTTP_201_CREATED)
        def create(payload: Create, storage: Storage = Depends(get_storage)):
            item = self.create_item(storage, payload)
            logger.info("Created %s id=%s", self.table, item.id)
            return item

        @router.put("/{item_id}", response_model=Out)
        def update(item_id: int, payload: Update, storage: Storage = Depends(get_storage)):
            current = self.get_or_404(storage, item_id)
            item = self.update_item(storage, current, payload)
            if item is None:
                raise HTTPException(status_code=404, detail=f"{self.path} item {item_id} not found")
            return item

        @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
        def delete(
            item_id: int,
            confirm: bool = Query(False, description="Must be true to delete"),
            storage: Storage = Depends(get_storage),
        ):
            if not confirm:
                raise HTTPException(status_code=400, detail="Deletion requires confirm=true")
            current = self.get_or_404(storage, item_id)
            if not self.delete_item(storage, current):
                raise HTTPException(status_code=404, detail=f"{self.path} item {item_id} not found")
            logger.info("Deleted %s id=%s", self.table, item_id)
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        self.extra_routes(router)
        return router

    def extra_routes(self, router: APIRouter) -> None:
        pass


# ---------------------------------------------------------------------
# Entity-specific managers
# ---------------------------------------------------------------------
class SectionManager(Manager):
    def list_items(self, storage):
        return sorted(storage.find_all(self.table), key=lambda s: (s.order, s.id or 0))

    def _check(self, section_type, content):
        enforce_content_size(content)
        try:
            validate_section_content(section_type, content)
        except SectionContentError as e:
            raise HTTPException(status_code=422, detail=str(e))

    def create_item(self, storage, payload):
        self._check(payload.type, payload.content)
        return super().create_item(storage, payload)

    def update_item(self, storage, current, payload):
        if payload.content is not None or payload.type is not None:
            content = payload.content if payload.content is not None else current.content
            self._check(payload.type or current.type, content)
        return super().update_item(storage, current, payload)


class ProjectManager(Manager):
    def create_item(self, storage, payload):
        data = payload.model_dump()
        if not data["slug"]:
            data["slug"] = blog_service.slugify(payload.title)
        return storage.create(self.table, data)


class ExperienceManager(Manager):
    def list_items(self, storage):
        return storage.get_all_experiences()


class CertificationManager(Manager):
    def list_items(self, storage):
        return storage.get_certifications()


class BlogCategoryManager(Manager):
    def create_item(self, storage, payload):
        data = payload.model_dump()
        data["slug"] = data.get("slug") or blog_service.slugify(payload.name)
        return storage.create(self.table, data)


class BlogPostManager(Manager):
    def list_items(self, storage):
        posts = storage.find_all(self.table)
        return sorted(posts, key=lambda p: p.id or 0, reverse=True)

    def create_item(self, storage, payload):
        enforce_content_size(payload.content)
        return blog_service.create_post(storage, payload)

    def update_item(self, storage, current, payload):
        if payload.content is not None:
            enforce_content_size(payload.content)
        return super().update_item(storage, current, payload)

    def delete_item(self, storage, current):
        # el caso de estudio sobrevive al post: solo se suelta el enlace
        for cs in storage.find_all_by_field("case_study_details", "blog_post_id", current.id):
            storage.update("case_study_details", cs.id, {"blog_post_id": None})
        return super().delete_item(storage, current)

    def extra_routes(self, router):
        def _transition(item_id: int, dst: str, storage: Storage):
            post = self.get_or_404(storage, item_id)
            try:
                return blog_service.transition_post(storage, post, dst)
            except blog_service.InvalidTransition as e:
                raise HTTPException(status_code=409, detail=str(e))

        @router.post("/{item_id}/publish", response_model=blog_schemas.BlogPost)
        def publish(item_id: int, storage: Storage = Depends(get_storage)):
            return _transition(item_id, "published", storage)

        @router.post("/{item_id}/unpublish", response_model=blog_schemas.BlogPost)
        def unpublish(item_id: int, storage: Storage = Depends(get_storage)):
            return _transition(item_id, "draft", storage)

        @router.post("/{item_id}/archive", response_model=blog_schemas.BlogPost)
        def archive(item_id: int, storage: Storage = Depends(get_storage)):
            return _transition(item_id, "archived", storage)


class BlogSubscriptionManager(Manager):
    def create_item(self, storage, payload):
        data = payload.model_dump()
        data["email"] = data["email"].strip().lower()
        if not data["confirmed"]:
            data["confirmation_token"] = blog_service.new_confirmation_token()
        return storage.create(self.table, data)


class CaseStudyManager(Manager):
    def create_item(self, storage, payload):
        data = payload.model_dump()
        if not data["slug"]:
            data["slug"] = blog_service.slugify(payload.title)
        return storage.create(self.table, data)


MANAGERS: List[Manager] = [
    SectionManager("sections", "sections", content_schemas.Section,
                   content_schemas.SectionCreate, content_schemas.SectionUpdate),
    ProjectManager("projects", "projects", content_schemas.Project,
                   content_schemas.ProjectCreate, content_schemas.ProjectUpdate),
    ExperienceManager("experiences", "experiences", content_schemas.Experience,
                      content_schemas.ExperienceCreate, content_schemas.ExperienceUpdate),
    CertificationManager("certifications", "certifications", content_schemas.Certification,
                         content_schemas.CertificationCreate, content_schemas.CertificationUpdate),
    BlogCategoryManager("blog-categories", "blog_categories", blog_schemas.BlogCategory,
                        blog_schemas.BlogCategoryCreate, blog_schemas.BlogCategoryUpdate),
    BlogPostManager("blog-posts", "blog_posts", blog_schemas.BlogPost,
                    blog_schemas.BlogPostCreate, blog_schemas.BlogPostUpdate),
    BlogSubscriptionManager("blog-subscriptions", "blog_subscriptions", blog_schemas.BlogSubscription,
                            blog_schemas.BlogSubscriptionCreate, blog_schemas.BlogSubscriptionUpdate),
    CaseStudyManager("case-studies", "case_study_details", blog_schemas.CaseStudyDetail,
                     blog_schemas.CaseStudyCreate, blog_schemas.CaseStudyUpdate),
    Manager("testimonials", "testimonials", content_schemas.Testimonial,
            content_schemas.TestimonialCreate, content_schemas.TestimonialUpdate),
    Manager("contact-submissions", "contact_submissions", content_schemas.ContactSubmission,
            content_schemas.ContactCreate, content_schemas.ContactUpdate),
]


router = APIRouter(dependencies=[Depends(require_admin)])
for _manager in MANAGERS:
    router.include_router(_manager.router())


# ---------------------------------------------------------------------
# Uploads (Firebase Storage)
# ---------------------------------------------------------------------
@router.post("/admin/uploads", status_code=status.HTTP_201_CREATED, tags=["admin:uploads"])
def upload_image(
    file: UploadFile = File(...),
    folder: str = Form("misc"),
):
    if not firebase_storage.is_firebase_configured():
        raise HTTPException(status_code=503, detail="File uploads are not configured")
    content_type = (file.content_type or "").lower()
    if content_type not in firebase_storage.ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=415, detail=f"Unsupported file type: {content_type or 'unknown'}")

    file.file.seek(0, 2)
    size = file.file.tell()
    file.file.seek(0)
    if size > settings.UPLOAD_MAX_MB * 1024 * 1024:
        raise HTTPException(status_code=413, detail=f"File exceeds {settings.UPLOAD_MAX_MB}MB")

    dest_path = firebase_storage.build_dest_path(folder, file.filename or "upload")
    url = firebase_storage.upload_file_to_firebase(file.file, content_type, dest_path)
    logger.info("Uploaded %s (%d bytes)", dest_path, size)
    return {"url": url, "path": dest_path}
