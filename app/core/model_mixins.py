"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel to add specific functionality. These are generic infrastructure
classes with no domain-specific logic.

Available Mixins:
    ObjectIdPrimaryKeyMixin: 24-character hex string primary key
    SlugMixin: Auto-generated URL slugs

Usage:
    from core.models import BaseModel
    from core.model_mixins import ObjectIdPrimaryKeyMixin, SlugMixin

    class Product(ObjectIdPrimaryKeyMixin, SlugMixin, BaseModel):
        name = models.CharField(max_length=100)

        def get_slug_source(self):
            return self.name

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from django.db import models
from django.utils.text import slugify

from core.helpers import OBJECT_ID_LENGTH, generate_object_id

if TYPE_CHECKING:
    from typing import Any


class ObjectIdPrimaryKeyMixin(models.Model):
    """
    Use a 24-character hex string as primary key.

    Ids are generated application-side (timestamp prefix + random
    suffix), so they are non-sequential and can be validated by format
    before any database lookup.

    Fields:
        id: CharField primary key (auto-generated)

    Usage:
        class Order(ObjectIdPrimaryKeyMixin, BaseModel):
            ...

        order = Order.objects.create(...)
        print(order.id)  # "6650f1c2a9b4e3d2c1b0a998"

    Note:
        Use core.helpers.is_valid_object_id() to reject malformed ids
        from URLs and request bodies before querying.
    """

    id = models.CharField(
        primary_key=True,
        max_length=OBJECT_ID_LENGTH,
        default=generate_object_id,
        editable=False,
        help_text="Unique 24-character hex identifier for this record",
    )

    class Meta:
        abstract = True


class SlugMixin(models.Model):
    """
    Add URL-safe slug field with auto-generation support.

    Example: "Blue Running Shoe" -> "blue-running-shoe"

    Fields:
        slug: URL-safe identifier, unique per model

    Override:
        get_slug_source(): Return the string to slugify (required)

    Note:
        The slug is regenerated whenever the source value changes.
        Duplicate sources get numbered slugs ("shoe", "shoe-1", ...).
    """

    slug = models.SlugField(
        max_length=255,
        unique=True,
        db_index=True,
        blank=True,
        help_text="URL-safe identifier for this record",
    )

    class Meta:
        abstract = True

    def get_slug_source(self) -> str:
        """Return the value to slugify."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement get_slug_source()"
        )

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Generate a unique slug from get_slug_source() before saving."""
        base_slug = slugify(self.get_slug_source()) or "item"
        if not self.slug or not re.fullmatch(rf"{re.escape(base_slug)}(-\d+)?", self.slug):
            slug = base_slug
            counter = 1
            model = self.__class__
            while model.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{counter}"
                counter += 1
            self.slug = slug
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "slug" not in update_fields:
                kwargs["update_fields"] = [*update_fields, "slug"]
        super().save(*args, **kwargs)
