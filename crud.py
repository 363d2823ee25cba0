"""
Resource engine

A `Resource` describes one collection: which timestamps it carries, which
records the public site may see and how listings are ordered. All mutations
run inside `store.transaction()` so concurrent writers on the same collection
are serialized.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from database import BaseStore, new_id, now_iso
from errors import NotFound

logger = logging.getLogger(__name__)

EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _published(record: dict) -> bool:
    return bool(record.get("isPublished"))


def _active(record: dict) -> bool:
    return bool(record.get("isActive"))


def _sort_order(record: dict):
    return record.get("sortOrder") or 0


def _created_at(record: dict) -> datetime:
    raw = record.get("createdAt") or ""
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(raw)
    except ValueError:
        return EPOCH
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


class Resource:
    def __init__(
        self,
        name: str,
        label: str,
        created_at: bool = True,
        updated_at: bool = False,
        visible: Optional[Callable[[dict], bool]] = None,
        sort_key: Optional[Callable[[dict], object]] = None,
        newest_first: bool = False,
    ):
        self.name = name
        self.label = label
        self.created_at = created_at
        self.updated_at = updated_at
        self.visible = visible
        self.sort_key = sort_key
        self.newest_first = newest_first

    def _ordered(self, records: List[dict]) -> List[dict]:
        if self.sort_key is None:
            return records
        return sorted(records, key=self.sort_key, reverse=self.newest_first)

    def enrich(self, store: BaseStore, records: List[dict]) -> List[dict]:
        return records

    def list_admin(self, store: BaseStore) -> List[dict]:
        return self.enrich(store, self._ordered(store.read(self.name)))

    def list_public(self, store: BaseStore, **filters) -> List[dict]:
        records = store.read(self.name)
        if self.visible is not None:
            records = [r for r in records if self.visible(r)]
        for key, value in filters.items():
            if value is not None:
                records = [r for r in records if r.get(key) == value]
        return self.enrich(store, self._ordered(records))

    def get(self, store: BaseStore, record_id: str) -> dict:
        record = next((r for r in store.read(self.name) if r.get("id") == record_id), None)
        if record is None:
            raise NotFound(f"{self.label} not found")
        return self.enrich(store, [record])[0]

    def create(self, store: BaseStore, data: dict) -> dict:
        record = {"id": new_id(), **data}
        now = now_iso()
        if self.created_at:
            record["createdAt"] = now
        if self.updated_at:
            record["updatedAt"] = now
        with store.transaction(self.name) as records:
            records.append(record)
        logger.info("Created %s %s", self.name, record["id"])
        return record

    def update(self, store: BaseStore, record_id: str, patch: dict) -> dict:
        with store.transaction(self.name) as records:
            index = next((i for i, r in enumerate(records) if r.get("id") == record_id), None)
            if index is None:
                raise NotFound(f"{self.label} not found")
            record = {**records[index], **patch}
            if self.updated_at:
                record["updatedAt"] = now_iso()
            records[index] = record
        logger.info("Updated %s %s", self.name, record_id)
        return record

    def delete(self, store: BaseStore, record_id: str) -> bool:
        """Remove `record_id`; missing ids are not an error."""
        with store.transaction(self.name) as records:
            before = len(records)
            records[:] = [r for r in records if r.get("id") != record_id]
            removed = len(records) < before
        if removed:
            logger.info("Deleted %s %s", self.name, record_id)
        return removed


class ProductResource(Resource):
    def enrich(self, store: BaseStore, records: List[dict]) -> List[dict]:
        categories = {c.get("id"): c for c in store.read("categories")}
        return [{**p, "category": categories.get(p.get("categoryId"))} for p in records]

    def get_public_by_slug(self, store: BaseStore, slug: str) -> dict:
        product = next(
            (p for p in store.read(self.name) if p.get("slug") == slug and _published(p)),
            None,
        )
        if product is None:
            raise NotFound(f"{self.label} not found")
        return self.enrich(store, [product])[0]


products = ProductResource("products", "Product", updated_at=True, visible=_published)
categories = Resource("categories", "Category", created_at=False)
banners = Resource("banners", "Banner", visible=_active, sort_key=_sort_order)
testimonials = Resource("testimonials", "Testimonial", visible=_published)
faqs = Resource("faqs", "FAQ", created_at=False, visible=_published, sort_key=_sort_order)
inquiries = Resource("inquiries", "Inquiry", sort_key=_created_at, newest_first=True)


# -------------------- Inquiries --------------------

def submit_inquiry(store: BaseStore, data: dict) -> dict:
    return inquiries.create(store, {**data, "status": "new"})


# -------------------- Settings --------------------

def get_settings(store: BaseStore) -> dict:
    return store.read("settings", default={})


def replace_settings(store: BaseStore, data: dict) -> dict:
    with store.transaction("settings", default={}) as settings:
        settings.clear()
        settings.update(data)
    logger.info("Settings replaced")
    return data


# -------------------- Dashboard --------------------

def stats(store: BaseStore) -> dict:
    inquiry_records = store.read("inquiries")
    return {
        "products": len(store.read("products")),
        "categories": len(store.read("categories")),
        "banners": len(store.read("banners")),
        "testimonials": len(store.read("testimonials")),
        "faqs": len(store.read("faqs")),
        "inquiries": len(inquiry_records),
        "newInquiries": sum(1 for i in inquiry_records if i.get("status") == "new"),
    }
