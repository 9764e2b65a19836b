"""Static catalogue data loaded into the store on start-up."""
from typing import Dict, List


EXERCISE_LIBRARY: List[dict] = [
    # Chest
    {
        "name": "Push-ups",
        "category": "strength",
        "target_muscle": "chest",
        "equipment": "bodyweight",
        "difficulty_level": "beginner",
        "instructions": "Start in plank position, lower body until chest nearly touches floor, push back up.",
        "tips": ["Keep core tight", "Full range of motion", "Control the movement"],
    },
    {
        "name": "Bench Press",
        "category": "strength",
        "target_muscle": "chest",
        "equipment": "barbell",
        "difficulty_level": "intermediate",
        "instructions": "Lie on bench, grip bar slightly wider than shoulders, lower to chest, press up.",
        "tips": ["Keep feet on ground", "Squeeze shoulder blades", "Control the descent"],
    },
    {
        "name": "Dumbbell Flyes",
        "category": "strength",
        "target_muscle": "chest",
        "equipment": "dumbbell",
        "difficulty_level": "intermediate",
        "instructions": "Lie on bench, arms slightly bent, lower dumbbells in arc motion, squeeze chest.",
        "tips": ["Slight bend in elbows", "Feel the stretch", "Squeeze at the top"],
    },
    # Legs
    {
        "name": "Squats",
        "category": "strength",
        "target_muscle": "legs",
        "equipment": "bodyweight",
        "difficulty_level": "beginner",
        "instructions": "Stand with feet shoulder-width apart, sit back and down, keep chest up.",
        "tips": ["Keep knees behind toes", "Weight in heels", "Full depth if possible"],
    },
    {
        "name": "Lunges",
        "category": "strength",
        "target_muscle": "legs",
        "equipment": "bodyweight",
        "difficulty_level": "beginner",
        "instructions": "Step forward, lower hips until both knees at 90 degrees, push back up.",
        "tips": ["Keep torso upright", "Step far enough forward", "Control the movement"],
    },
    {
        "name": "Deadlifts",
        "category": "strength",
        "target_muscle": "legs",
        "equipment": "barbell",
        "difficulty_level": "advanced",
        "instructions": "Stand with bar over mid-foot, bend at hips and knees, grip bar, stand up straight.",
        "tips": ["Keep back straight", "Bar close to body", "Drive through heels"],
    },
    # Back
    {
        "name": "Pull-ups",
        "category": "strength",
        "target_muscle": "back",
        "equipment": "pullup_bar",
        "difficulty_level": "intermediate",
        "instructions": "Hang from bar, pull body up until chin over bar, lower with control.",
        "tips": ["Full range of motion", "Don't swing", "Squeeze shoulder blades"],
    },
    {
        "name": "Bent-over Rows",
        "category": "strength",
        "target_muscle": "back",
        "equipment": "barbell",
        "difficulty_level": "intermediate",
        "instructions": "Bend forward at hips, pull bar to lower chest, squeeze shoulder blades.",
        "tips": ["Keep back straight", "Pull to sternum", "Control the weight"],
    },
    # Core
    {
        "name": "Plank",
        "category": "strength",
        "target_muscle": "core",
        "equipment": "bodyweight",
        "difficulty_level": "beginner",
        "instructions": "Hold push-up position, keep body straight from head to heels.",
        "tips": ["Don't let hips sag", "Breathe normally", "Engage core"],
    },
    {
        "name": "Crunches",
        "category": "strength",
        "target_muscle": "core",
        "equipment": "bodyweight",
        "difficulty_level": "beginner",
        "instructions": "Lie on back, knees bent, lift shoulder blades off ground.",
        "tips": ["Don't pull on neck", "Focus on abs", "Controlled movement"],
    },
    # Cardio
    {
        "name": "Jumping Jacks",
        "category": "cardio",
        "target_muscle": "full_body",
        "equipment": "bodyweight",
        "difficulty_level": "beginner",
        "instructions": "Jump feet apart while raising arms overhead, jump back to starting position.",
        "tips": ["Land softly", "Keep rhythm", "Stay light on feet"],
    },
    {
        "name": "Burpees",
        "category": "cardio",
        "target_muscle": "full_body",
        "equipment": "bodyweight",
        "difficulty_level": "advanced",
        "instructions": "Squat down, jump back to plank, do push-up, jump feet forward, jump up.",
        "tips": ["Maintain form when tired", "Breathe consistently", "Modify if needed"],
    },
    {
        "name": "Mountain Climbers",
        "category": "cardio",
        "target_muscle": "full_body",
        "equipment": "bodyweight",
        "difficulty_level": "intermediate",
        "instructions": "From plank position, drive knees toward chest one at a time in a running motion.",
        "tips": ["Keep hips level", "Stay on the balls of your feet", "Keep a steady pace"],
    },
]


# Passwords are only used to seed the volatile demo store.
DEMO_USERS: List[dict] = [
    {"key": "admin", "name": "Admin User", "email": "admin@fitness.com", "role": "admin", "password": "admin123", "days_ago": 60},
    {"key": "trainer", "name": "John Trainer", "email": "trainer@fitness.com", "role": "trainer", "password": "trainer123", "days_ago": 60},
    {"key": "trainee", "name": "Jane Trainee", "email": "trainee@fitness.com", "role": "trainee", "password": "trainee123", "days_ago": 50, "trainer": "trainer"},
    {"key": "trainee1", "name": "John Doe", "email": "john.doe@fitness.com", "role": "trainee", "password": "trainee123", "days_ago": 30, "trainer": "trainer"},
    {"key": "trainee2", "name": "Jane Smith", "email": "jane.smith@fitness.com", "role": "trainee", "password": "trainee123", "days_ago": 45, "trainer": "trainer"},
    {"key": "trainee3", "name": "Mike Johnson", "email": "mike.johnson@fitness.com", "role": "trainee", "password": "trainee123", "days_ago": 15, "trainer": "trainer"},
]


DEMO_WORKOUT_TEMPLATES: List[Dict] = [
    {
        "name": "Upper Body Strength",
        "description": "A comprehensive upper body workout focusing on chest, shoulders, and arms",
        "difficulty": "intermediate",
        "estimated_duration": 45,
        "category": "strength",
        "is_public": False,
        "tags": ["strength", "upper-body", "muscle-building"],
        "notes": "Perfect for building upper body strength and muscle mass",
        "days_ago": 7,
        "exercises": [
            {
                "name": "Push-ups",
                "category": "strength",
                "target_muscle": "chest",
                "equipment": "bodyweight",
                "instructions": "Start in plank position, lower body until chest nearly touches floor, push back up.",
                "difficulty_level": "beginner",
                "tips": ["Keep core tight", "Maintain straight line from head to heels"],
            },
            {
                "name": "Shoulder Press",
                "category": "strength",
                "target_muscle": "shoulders",
                "equipment": "dumbbells",
                "instructions": "Press weights overhead, lower with control.",
                "difficulty_level": "intermediate",
                "tips": ["Keep core engaged", "Press straight up"],
            },
            {
                "name": "Bicep Curls",
                "category": "strength",
                "target_muscle": "biceps",
                "equipment": "dumbbells",
                "instructions": "Curl weights up keeping elbows at sides.",
                "difficulty_level": "beginner",
                "tips": ["Control the descent", "Keep elbows stationary"],
            },
        ],
    },
    {
        "name": "HIIT Cardio Blast",
        "description": "High-intensity interval training for cardiovascular fitness",
        "difficulty": "advanced",
        "estimated_duration": 30,
        "category": "cardio",
        "is_public": True,
        "tags": ["cardio", "hiit", "fat-burn"],
        "notes": "High-intensity intervals for maximum calorie burn",
        "days_ago": 3,
        "exercises": [
            {
                "name": "Jumping Jacks",
                "category": "cardio",
                "target_muscle": "full-body",
                "equipment": "bodyweight",
                "instructions": "Jump feet wide while raising arms overhead, return to start.",
                "difficulty_level": "beginner",
                "tips": ["Land softly", "Keep consistent rhythm"],
            },
            {
                "name": "Burpees",
                "category": "cardio",
                "target_muscle": "full-body",
                "equipment": "bodyweight",
                "instructions": "Squat down, jump back to plank, push-up, jump feet forward, jump up.",
                "difficulty_level": "advanced",
                "tips": ["Maintain form even when tired", "Breathe consistently"],
            },
            {
                "name": "High Knees",
                "category": "cardio",
                "target_muscle": "legs",
                "equipment": "bodyweight",
                "instructions": "Run in place bringing knees up high.",
                "difficulty_level": "intermediate",
                "tips": ["Keep core engaged", "Pump arms actively"],
            },
        ],
    },
]
