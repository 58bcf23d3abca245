from arcade import db, bcrypt
from flask_login import UserMixin


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    sessions = db.relationship('GameSessionRecord', back_populates='user', lazy='dynamic')

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }


class GameSessionRecord(db.Model):
    """Persisted form of a game session.

    The JSON columns are always replaced wholesale by the store, never
    mutated in place.
    """
    __tablename__ = 'game_session'
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(db.String(36), unique=True, nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=True, index=True)
    game = db.Column(db.String(32), nullable=False, index=True)
    config = db.Column(db.JSON, nullable=False)
    content = db.Column(db.JSON, nullable=False)
    progress = db.Column(db.JSON, nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False, index=True)
    start_time = db.Column(db.Float, nullable=False)
    end_time = db.Column(db.Float, nullable=True)
    score = db.Column(db.Integer, default=0, nullable=False)
    version = db.Column(db.Integer, nullable=False)

    user = db.relationship('User', back_populates='sessions')

    __table_args__ = (
        db.Index('ix_game_session_user_game', 'user_id', 'game'),
    )
    __mapper_args__ = {'version_id_col': version}
