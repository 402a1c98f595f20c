from typing import Dict, Any
from fastapi import Request, Response, HTTPException
import os
import time
from urllib.parse import urlparse
import redis as pyredis
from fastapi_limiter import FastAPILimiter
from fastapi_limiter.depends import RateLimiter

def _client_key(req: Request) -> str:
    # Clé = IP cliente + chemin (les lecteurs partagent souvent la même IP locale)
    ip = req.client.host if req.client else "local"
    return f"ip:{ip}:{req.url.path}"

async def _identifier(req: Request) -> str:
    return _client_key(req)

class PathRateLimiter(RateLimiter):
    """
    RateLimiter fastapi-limiter dont la clé Redis ne dépend que de l'identifiant.
    - RateLimiter.__call__ parcourt request.app.routes (route.path), ce qui échoue avec
      les routers inclus des versions récentes de FastAPI.
    - Le chemin fait déjà partie de l'identifiant: l'index de route est inutile.
    """

    async def __call__(self, request: Request, response: Response):
        if not FastAPILimiter.redis:
            raise Exception("FastAPILimiter.init doit être appelé dans le lifespan")
        identifier = self.identifier or FastAPILimiter.identifier
        callback = self.callback or FastAPILimiter.http_callback
        key = f"{FastAPILimiter.prefix}:{await identifier(request)}"
        try:
            pexpire = await self._check(key)
        except pyredis.exceptions.NoScriptError:
            FastAPILimiter.lua_sha = await FastAPILimiter.redis.script_load(FastAPILimiter.lua_script)
            pexpire = await self._check(key)
        if pexpire != 0:
            return await callback(request, response, pexpire)

def optional_rate_limit(times: int, seconds: int):
    limiter = PathRateLimiter(times=times, seconds=seconds, identifier=_identifier)

    async def _dep(request: Request, response: Response):
        # Forcer le fallback mémoire en DEV si demandé
        if os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1":
            now = time.time()
            key = _client_key(request)
            store = getattr(request.app.state, "_rl_store", {})
            hits = [t for t in store.get(key, []) if now - t < seconds]
            if len(hits) >= times:
                raise HTTPException(status_code=429, detail="Too Many Requests")
            hits.append(now)
            store[key] = hits
            request.app.state._rl_store = store
            return

        # Respecter le flag global
        disabled_flag = getattr(request.app.state, "rate_limit_enabled", None) is False
        if disabled_flag:
            return

        # Utiliser fastapi-limiter si initialisé
        if getattr(FastAPILimiter, "redis", None) is None:
            return

        return await limiter(request, response)
    return _dep

def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)

    limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
    backend = "redis" if limiter_ready else None

    info: Dict[str, Any] = {
        "enabled": (bool(enabled) if enabled is not None else None),
        "ready": limiter_ready,
        "backend": backend,
        "local_fallback": os.getenv("LOCAL_RATE_LIMIT_FALLBACK") == "1",
    }

    if backend == "redis":
        redis_url = os.getenv("RATE_LIMIT_REDIS_URL")
        if redis_url:
            p = urlparse(redis_url)
            info["redis"] = {
                "scheme": p.scheme,
                "host": p.hostname,
                "port": p.port,
            }

    return info
