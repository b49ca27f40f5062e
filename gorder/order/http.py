"""HTTP interface of the order service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from flask import Flask, jsonify, request

from gorder.order.commands import CreateOrder
from gorder.order.queries import GetCustomerOrder
from gorder.order.service import Application
from gorder.stock.domain import ItemWithQuantity

SUCCESS_URL = "http://localhost:8282/success"
BASE_URL = "/api"


def _parse_create_order(data: Any) -> CreateOrder:
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    fields = {str(key).lower(): value for key, value in data.items()}
    customer_id = fields.get("customerid") or ""
    if not isinstance(customer_id, str):
        raise ValueError("customerID must be a string")
    raw_items = fields.get("items") or []
    if not isinstance(raw_items, list):
        raise ValueError("items must be a list")
    if not all(isinstance(item, Mapping) for item in raw_items):
        raise ValueError("every item must be an object")
    return CreateOrder(
        customer_id=customer_id,
        items=[ItemWithQuantity.from_dict(item) for item in raw_items],
    )


def create_app(application: Application) -> Flask:
    """Build the Flask app serving the order API and the ping endpoint."""
    app = Flask(__name__)

    @app.post(f"{BASE_URL}/customer/<customer_id>/orders")
    def post_customer_orders(customer_id: str):
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({"error": "invalid JSON body"}), 400
        try:
            cmd = _parse_create_order(data)
        except (ValueError, TypeError) as err:
            return jsonify({"error": str(err)}), 400
        try:
            result = application.commands.create_order.handle(cmd)
        except Exception as err:
            return jsonify({"error": str(err)}), 200
        return jsonify(
            {
                "message": "success",
                "customer_iD": cmd.customer_id,
                "order_iD": result.order_id,
                "redirect_url": (
                    f"{SUCCESS_URL}?customerID={cmd.customer_id}&orderID={result.order_id}"
                ),
            }
        ), 200

    @app.get(f"{BASE_URL}/customer/<customer_id>/orders/<order_id>")
    def get_customer_order(customer_id: str, order_id: str):
        try:
            order = application.queries.get_customer_order.handle(
                GetCustomerOrder(customer_id=customer_id, order_id=order_id)
            )
        except Exception as err:
            return jsonify({"err": str(err)}), 200
        return jsonify({"message": "success", "data": {"Order": order.to_dict()}}), 200

    @app.get("/ping")
    def ping():
        return jsonify("pong"), 200

    return app