from marketplace.application.dtos.request_context import RequestContext

__all__ = ["RequestContext"]
