from spill import db, bcrypt


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class ScoreRecord(db.Model):
    __tablename__ = 'leaderboard'
    __table_args__ = (
        db.UniqueConstraint('user_id', 'game_id', name='uq_leaderboard_user_game'),
    )
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    game_id = db.Column(db.String(64), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    user = db.relationship('User')

    def to_dict(self):
        return {
            'userId': self.user_id,
            'username': self.user.username if self.user else None,
            'score': self.score,
        }
