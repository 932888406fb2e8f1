from flask import Blueprint, current_app, jsonify, request
from spill import db
from spill.errors import ServiceError
from spill.schemas import LeaderboardQuery, ScoreUpdateRequest, payload_from
from spill.services.leaderboard import apply_score_delta, get_ranking


leaderboard = Blueprint('leaderboard', __name__)


@leaderboard.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    try:
        query = LeaderboardQuery.from_args(request.args, current_app.config.get('DEFAULT_GAME'))
        rows = get_ranking(db.session, query.game_id)
    except ServiceError as exc:
        return jsonify([]), exc.status_code
    return jsonify(rows)


@leaderboard.route('/updateScore', methods=['POST'])
def update_score():
    try:
        data = ScoreUpdateRequest.from_payload(payload_from(request))
        score = apply_score_delta(db.session, data.user_id, data.game_id, data.delta)
    except ServiceError as exc:
        return jsonify({'success': False, 'message': exc.message}), exc.status_code
    return jsonify({
        'success': True,
        'message': 'Score updated successfully',
        'score': score,
    })
