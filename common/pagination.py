"""Pagination that wraps list results in a named envelope.

Responses look like `{"<results_key>": [...], "pagination": {...}}` and
accept `page` and `limit` query params.
"""

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class EnvelopePagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "limit"
    max_page_size = 100
    results_key = "results"

    def get_paginated_response(self, data):
        return Response(
            {
                self.results_key: data,
                "pagination": {
                    "current_page": self.page.number,
                    "total_pages": self.page.paginator.num_pages,
                    "total_items": self.page.paginator.count,
                    "items_per_page": self.get_page_size(self.request),
                    "has_next_page": self.page.has_next(),
                    "has_prev_page": self.page.has_previous(),
                },
            }
        )

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "properties": {
                self.results_key: schema,
                "pagination": {
                    "type": "object",
                    "properties": {
                        "current_page": {"type": "integer"},
                        "total_pages": {"type": "integer"},
                        "total_items": {"type": "integer"},
                        "items_per_page": {"type": "integer"},
                        "has_next_page": {"type": "boolean"},
                        "has_prev_page": {"type": "boolean"},
                    },
                },
            },
        }


class ProductPagination(EnvelopePagination):
    page_size = 12
    results_key = "products"


class OrderPagination(EnvelopePagination):
    page_size = 10
    results_key = "orders"


class UserPagination(EnvelopePagination):
    results_key = "users"
