"""
Pagination producing the success envelope.

Paginated list responses look like:

    {
        "statusCode": 200,
        "message": "Success",
        "data": {
            "products": [...],
            "pagination": {"page": 1, "limit": 20, "total": 42, "pages": 3}
        }
    }

Usage:
    class ProductListView(ListAPIView):
        pagination_class = EnvelopePagination
        results_key = "products"
"""

from __future__ import annotations

import math

from rest_framework.pagination import PageNumberPagination

from core.responses import api_response


class EnvelopePagination(PageNumberPagination):
    """Page-number pagination with a ``limit`` query parameter."""

    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100

    def get_paginated_response(self, data):
        results_key = getattr(self.request.parser_context.get("view"), "results_key", "results")
        total = self.page.paginator.count
        limit = self.page.paginator.per_page
        return api_response(
            {
                results_key: data,
                "pagination": {
                    "page": self.page.number,
                    "limit": limit,
                    "total": total,
                    "pages": math.ceil(total / limit) if limit else 0,
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                "statusCode": {"type": "integer", "example": 200},
                "message": {"type": "string"},
                "data": {
                    "type": "object",
                    "properties": {
                        "results": schema,
                        "pagination": {"type": "object"},
                    },
                },
            },
        }
