import os


def _origins(raw):
    return [o.strip() for o in raw.split(',') if o.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///hexdle.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Origins allowed for both HTTP (CORS) and the Socket.IO handshake
    CORS_ORIGINS = _origins(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
    ))
    # Persist resolved versus matches to the match_record table
    RECORD_MATCHES = os.environ.get('RECORD_MATCHES', '1') not in ('0', 'false', 'False')
    MATCH_HISTORY_LIMIT = int(os.environ.get('MATCH_HISTORY_LIMIT', '20'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    PORT = int(os.environ.get('PORT', '3000'))
