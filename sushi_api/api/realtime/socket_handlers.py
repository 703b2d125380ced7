# sushi_api/api/realtime/socket_handlers.py
from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable

from flask import request
from flask_socketio import ConnectionRefusedError, SocketIO, disconnect, emit, join_room, leave_room

from sushi_api.core.exceptions import AppError
from sushi_api.core.realtime.events import InboundEvent, OutboundEvent
from sushi_api.core.realtime.rooms import Room
from sushi_api.services.realtime_gateway import ConnectionContext, RealtimeGateway, parse_order_id

logger = logging.getLogger(__name__)

Handler = Callable[[ConnectionContext, Any], None]


def _get_token(auth: Any) -> str | None:
    # 1) handshake: io(url, { auth: { token } })
    if isinstance(auth, dict):
        token = auth.get("token")
        if isinstance(token, str) and token.strip():
            return token.strip()

    # 2) Authorization: Bearer <token>
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header.split(" ", 1)[1].strip() or None

    # 3) querystring ?token=...
    token = request.args.get("token")
    if token:
        return str(token).strip()

    return None


def _reply(event: OutboundEvent, payload: Any) -> None:
    emit(event.value, payload, to=request.sid)


def register_socket_handlers(socketio: SocketIO, gateway: RealtimeGateway) -> None:
    def on_inbound(event: InboundEvent) -> Callable[[Handler], Handler]:
        """Registra o handler e valida a permissão do papel antes de chamá-lo."""

        def decorator(fn: Handler) -> Handler:
            @wraps(fn)
            def wrapper(data: Any = None) -> None:
                ctx = gateway.context(request.sid)
                if ctx is None:
                    disconnect()
                    return

                if not gateway.authorize(ctx, event):
                    logger.info("Evento '%s' negado para user_id=%s (rol=%s)", event.value, ctx.user_id, ctx.role_name)
                    _reply(
                        OutboundEvent.AUTHORIZATION_ERROR,
                        {"event": event.value, "message": f"No autorizado para '{event.value}'"},
                    )
                    return

                fn(ctx, data)

            socketio.on_event(event.value, wrapper)
            return fn

        return decorator

    @socketio.on("connect")
    def on_connect(auth: Any = None):
        try:
            ctx = gateway.authenticate(request.sid, _get_token(auth))
        except AppError as e:
            # recusa antes de qualquer join
            logger.info("Conexão Socket.IO recusada (%s): %s", request.sid, e.code)
            raise ConnectionRefusedError(e.code) from e

        for room in ctx.rooms:
            join_room(room.name)

        logger.info(
            "Usuário %s (rol: %s) conectado via Socket.IO; salas: %s",
            ctx.display_name,
            ctx.role_name,
            ", ".join(ctx.room_names),
        )
        _reply(OutboundEvent.CONNECTION_STATE, gateway.connection_state(ctx))

    @socketio.on("disconnect")
    def on_disconnect(reason: Any = None):
        ctx = gateway.detach(request.sid)
        if ctx is not None:
            logger.info("Cliente desconectado: %s (%s) - razão: %s", ctx.display_name, request.sid, reason)

    @on_inbound(InboundEvent.ANNOUNCE_READY)
    def on_announce_ready(ctx: ConnectionContext, data: Any) -> None:
        _reply(OutboundEvent.CONNECTION_CONFIRMED, gateway.confirmation(ctx))

        if gateway.authorize(ctx, InboundEvent.REQUEST_HISTORY):
            _reply(OutboundEvent.HISTORY_SNAPSHOT, gateway.history_snapshot())

    @on_inbound(InboundEvent.REQUEST_HISTORY)
    def on_request_history(ctx: ConnectionContext, data: Any) -> None:
        _reply(OutboundEvent.HISTORY_SNAPSHOT, gateway.history_snapshot())

    @on_inbound(InboundEvent.JOIN_ORDER_ROOM)
    def on_join_order_room(ctx: ConnectionContext, data: Any) -> None:
        order_id = parse_order_id(data)
        if order_id is None:
            _reply(OutboundEvent.VALIDATION_ERROR, {"event": InboundEvent.JOIN_ORDER_ROOM.value, "message": "orderId inválido"})
            return

        room = Room.for_order(order_id)
        join_room(room.name)
        _reply(
            OutboundEvent.ORDER_ROOM_JOINED,
            {"message": f"Unido a la sala del pedido {order_id}", "room": room.name},
        )

    @on_inbound(InboundEvent.LEAVE_ORDER_ROOM)
    def on_leave_order_room(ctx: ConnectionContext, data: Any) -> None:
        order_id = parse_order_id(data)
        if order_id is None:
            _reply(OutboundEvent.VALIDATION_ERROR, {"event": InboundEvent.LEAVE_ORDER_ROOM.value, "message": "orderId inválido"})
            return

        room = Room.for_order(order_id)
        leave_room(room.name)
        _reply(
            OutboundEvent.ORDER_ROOM_LEFT,
            {"message": f"Abandonada la sala del pedido {order_id}", "room": room.name},
        )
