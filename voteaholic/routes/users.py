from flask import jsonify, request
from flask_login import login_user, logout_user

from voteaholic.services import users as user_service
from voteaholic.services.security import current_actor
from voteaholic.services.voting import register_voter


def register_user_routes(app):
    @app.route("/users", methods=["GET"])
    def list_users():
        return jsonify([user.to_dict() for user in user_service.list_users()])

    @app.route("/users", methods=["POST"])
    def signup():
        data = request.get_json(silent=True) or {}
        user = user_service.register_user(
            data.get("username"),
            data.get("email"),
            data.get("password"),
            role=data.get("role"),
            actor=current_actor(),
        )
        return jsonify(user.to_dict()), 201

    @app.route("/users/login", methods=["POST"])
    def login():
        data = request.get_json(silent=True) or {}
        user = user_service.authenticate(data.get("email"), data.get("password"))
        login_user(user, remember=bool(data.get("remember")))
        return jsonify({"message": "Login successful", "user": user.to_dict()})

    @app.route("/users/logout", methods=["POST"])
    def logout():
        logout_user()
        return jsonify({"message": "Logged out"})

    @app.route("/users/election/join", methods=["POST"])
    def join_election():
        data = request.get_json(silent=True) or {}
        status = register_voter(data.get("electionId"), data.get("userId"))
        payload = status.to_dict()
        payload["message"] = "User added to election"
        return jsonify(payload), 201

    @app.route("/users/<user_id>")
    def user_detail(user_id):
        return jsonify(user_service.get_user(user_id).to_dict())
