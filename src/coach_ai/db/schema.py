"""SQLite schema mirroring the hosted PostgreSQL tables.

Arrays and JSON columns are stored as JSON text, booleans as 0/1.
"""

SCHEMA = """
CREATE TABLE IF NOT EXISTS profiles (
    id TEXT PRIMARY KEY,
    user_id TEXT UNIQUE NOT NULL,
    full_name TEXT,
    avatar_url TEXT,
    goal TEXT,
    experience_level TEXT,
    weight_kg REAL,
    height_cm REAL,
    streak_days INTEGER DEFAULT 0,
    total_xp INTEGER DEFAULT 0,
    created_at TEXT,
    updated_at TEXT
);

CREATE TABLE IF NOT EXISTS workout_routines (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT,
    target_muscle_groups TEXT,
    estimated_duration_minutes INTEGER,
    difficulty_level TEXT,
    generated_by_ai INTEGER DEFAULT 0,
    is_active INTEGER DEFAULT 1,
    created_at TEXT,
    updated_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_routines_user_active
    ON workout_routines(user_id, is_active);

CREATE TABLE IF NOT EXISTS routine_exercises (
    id TEXT PRIMARY KEY,
    routine_id TEXT NOT NULL REFERENCES workout_routines(id) ON DELETE CASCADE,
    name TEXT NOT NULL,
    sets INTEGER NOT NULL,
    reps TEXT NOT NULL,
    weight_suggestion TEXT,
    rest_seconds INTEGER,
    notes TEXT,
    order_index INTEGER NOT NULL,
    created_at TEXT
);

CREATE INDEX IF NOT EXISTS idx_routine_exercises_routine
    ON routine_exercises(routine_id, order_index);

CREATE TABLE IF NOT EXISTS workout_sessions (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    routine_id TEXT REFERENCES workout_routines(id),
    started_at TEXT,
    completed_at TEXT,
    duration_seconds INTEGER,
    xp_earned INTEGER,
    notes TEXT
);

CREATE INDEX IF NOT EXISTS idx_sessions_user_completed
    ON workout_sessions(user_id, completed_at);

CREATE TABLE IF NOT EXISTS completed_sets (
    id TEXT PRIMARY KEY,
    session_id TEXT NOT NULL REFERENCES workout_sessions(id) ON DELETE CASCADE,
    exercise_name TEXT NOT NULL,
    set_number INTEGER NOT NULL,
    reps_completed INTEGER,
    weight_used TEXT,
    completed_at TEXT
);

CREATE TABLE IF NOT EXISTS user_notifications (
    id TEXT PRIMARY KEY,
    user_id TEXT UNIQUE NOT NULL,
    notifications_enabled INTEGER DEFAULT 0,
    push_subscription TEXT,
    preferred_training_time TEXT DEFAULT '18:00',
    training_days TEXT DEFAULT '["lunes", "miércoles", "viernes"]',
    last_notified_at TEXT,
    created_at TEXT,
    updated_at TEXT
);
"""

# Columns serialized as JSON text in SQLite
JSON_COLUMNS = {
    "workout_routines": {"target_muscle_groups"},
    "user_notifications": {"push_subscription", "training_days"},
}

# Columns stored as INTEGER 0/1 in SQLite
BOOL_COLUMNS = {
    "workout_routines": {"generated_by_ai", "is_active"},
    "user_notifications": {"notifications_enabled"},
}

# Default timestamp column filled on insert, per table
CREATED_COLUMNS = {
    "profiles": "created_at",
    "workout_routines": "created_at",
    "routine_exercises": "created_at",
    "workout_sessions": "started_at",
    "completed_sets": "completed_at",
    "user_notifications": "created_at",
}

# Tables carrying an updated_at column
UPDATED_COLUMNS = {"profiles", "workout_routines", "user_notifications"}

TABLES = tuple(CREATED_COLUMNS)
