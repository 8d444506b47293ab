# Mock Backend Models
#
# Catalog, deal and order documents are the storefront's own models; this
# package only adds the response envelope.

from .envelope import ApiResponse, ok, error_body

__all__ = ["ApiResponse", "ok", "error_body"]
