#!/usr/bin/env python3
"""
ECB Oracle Server - Serves a vulnerable encryption oracle over HTTP
Every request is encrypted as [prefix] + data + secret under a fixed AES-ECB key

Endpoints:
  POST /api/encrypt  {"data": "base64"} -> {"ciphertext": "base64"}
  GET  /status       health check
"""

import base64
import binascii

from flask import Flask, jsonify, request

from ..config import HOST, PORT


def create_app(oracle) -> Flask:
    """Flask app answering encryption requests with oracle"""
    app = Flask(__name__)
    stats = {"queries": 0}

    @app.route("/api/encrypt", methods=["POST"])
    def encrypt_message():
        data = request.get_json(silent=True)
        if not data or "data" not in data:
            return jsonify({"error": "Missing 'data' field"}), 400

        try:
            plaintext = base64.b64decode(data["data"], validate=True)
        except (binascii.Error, TypeError) as e:
            print(f"[ERROR] Invalid base64 payload: {e}")
            return jsonify({"error": "Invalid base64 in 'data'"}), 400

        stats["queries"] += 1
        ciphertext = oracle(plaintext)
        return jsonify({"ciphertext": base64.b64encode(ciphertext).decode()})

    @app.route("/status", methods=["GET"])
    def health_check():
        return jsonify({
            "status": "running",
            "queries": stats["queries"],
            "service": "ECB Oracle",
        })

    return app


def start_server(oracle, host: str = HOST, port: int = PORT):
    """Starts the ECB oracle server"""
    print("-" * 60)
    print(f"[*] ECB Oracle Server started on http://{host}:{port}")
    print("[*] Endpoints: /api/encrypt, /status")
    create_app(oracle).run(host=host, port=port)
