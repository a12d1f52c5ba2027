# Prometheus metrics for HTTP traffic and claim outcomes

import time
from fastapi import FastAPI, Request, Response
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

# Metrics
request_count = Counter('http_requests_total', 'Total HTTP requests', ['method', 'endpoint', 'status'])
request_duration = Histogram('http_request_duration_seconds', 'HTTP request duration', ['method', 'endpoint'])

# Claim metrics
claim_attempts = Counter('claim_attempts_total', 'Claim attempts by outcome', ['outcome'])
unclaim_attempts = Counter('unclaim_attempts_total', 'Unclaim attempts by outcome', ['outcome'])

def _route_template(request: Request) -> str:
    # Label by route template so item ids don't explode cardinality
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)

def setup_monitoring_middleware(app: FastAPI):
    """Add monitoring middleware to track metrics"""

    @app.middleware("http")
    async def monitor_requests(request: Request, call_next):
        start_time = time.time()

        # Process request
        response = await call_next(request)

        # Calculate metrics
        process_time = time.time() - start_time
        endpoint = _route_template(request)

        # Update metrics
        request_count.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code
        ).inc()

        request_duration.labels(
            method=request.method,
            endpoint=endpoint
        ).observe(process_time)

        return response

    @app.get("/metrics", include_in_schema=False)
    async def metrics():
        """Prometheus exposition endpoint"""
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
