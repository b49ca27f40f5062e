"""The order service: domain, repository, handlers, paid-order consumer and HTTP routes."""