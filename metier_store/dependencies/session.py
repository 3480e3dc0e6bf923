from typing import Optional

from fastapi import Depends, Header, HTTPException

from metier_store.utils.session import SessionContext


def get_session_context(
    x_role: Optional[str] = Header(default=None),
    x_session_id: Optional[str] = Header(default=None),
) -> SessionContext:
    context = SessionContext.from_role(x_role, session_id=x_session_id)
    # carts and orders are scoped by session id, so a signed-in caller must send one
    if context.is_authenticated and not x_session_id:
        raise HTTPException(status_code=400, detail="X-Session-Id header required")
    return context


def require_customer(context: SessionContext = Depends(get_session_context)):
    if not context.can_access_customer():
        raise HTTPException(status_code=403, detail="Customer session required")
    return context


def require_admin(context: SessionContext = Depends(get_session_context)):
    if not context.can_access_admin():
        raise HTTPException(status_code=403, detail="Admin access required")
    return context
