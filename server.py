"""
Avatar Relay: backend for the avatar chat front-end.
Keeps the Botpress webhook id and HeyGen API key on the server, maps opaque
session ids to Botpress conversations, and relays bot replies.

Usage:
    python server.py

Endpoints:
    POST http://localhost:3000/api/start-session
    POST http://localhost:3000/api/sendMessage
    POST http://localhost:3000/api/get-heygen-token
    POST http://localhost:3000/api/end-session
    GET  http://localhost:3000/health
"""

from datetime import datetime, timezone

from flask import Flask, jsonify
from flask_cors import CORS

from app_config import PORT, DEBUG, CORS_ORIGINS
from core import sessions
from routes import relay_bp
from routes import relay as relay_routes
from chat_logger import get_logger

logger = get_logger()

# ═══════════════════════════════════════════
# FLASK APP
# ═══════════════════════════════════════════

app = Flask(__name__)
CORS(app, origins=CORS_ORIGINS)
app.register_blueprint(relay_bp)


@app.route("/health", methods=["GET"])
def health():
    """Health check endpoint."""
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "sessions": len(sessions),
        "botpress_configured": relay_routes.botpress_client.configured,
        "heygen_configured": relay_routes.heygen_client.configured,
    })


@app.errorhandler(404)
def not_found(_error):
    return jsonify({"error": "Not found"}), 404


@app.errorhandler(405)
def method_not_allowed(_error):
    return jsonify({"error": "Method not allowed"}), 405


# ═══════════════════════════════════════════
# STARTUP
# ═══════════════════════════════════════════

if __name__ == "__main__":
    if not relay_routes.botpress_client.configured:
        logger.warning("BOTPRESS_WEBHOOK_ID is not set; chat sessions will fail")
    if not relay_routes.heygen_client.configured:
        logger.warning("HEYGEN_API_KEY is not set; avatar tokens will fail")

    logger.info(f"Server is running on port {PORT}")
    app.run(
        host="0.0.0.0",
        port=PORT,
        debug=DEBUG,
    )
