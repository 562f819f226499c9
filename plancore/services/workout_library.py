"""Workout template library in its authoring format.

Templates are grouped by kind, then by category. Tempo, interval and
long-run templates are authored flat (a single "structure" string); hill
templates nest their segments under "workout". The catalog normalizes
both shapes on retrieval, so nothing else should read these dicts.

Pace placeholders ("tempo pace", "threshold effort", "5K pace" ...) are
substituted per runner at prescription time.
"""

from __future__ import annotations

from typing import Any

TEMPO_LIBRARY: dict[str, list[dict[str, Any]]] = {
    "THRESHOLD": [
        {
            "name": "Steady Threshold Run",
            "duration": "20-30 minutes",
            "structure": "2 miles easy warmup + 20-30 min @ threshold pace + 1 mile easy cooldown",
            "description": "Continuous run at lactate threshold pace",
            "benefits": "Raises lactate threshold, sustained race rhythm",
        },
        {
            "name": "Threshold Blocks",
            "duration": "30-40 minutes total",
            "structure": "Warmup + 2-3 x 10 min @ threshold pace with 2 min recovery + Cooldown",
            "description": "Broken threshold work for more total time at tempo effort",
            "benefits": "Accumulates threshold time with controlled fatigue",
        },
    ],
    "TRADITIONAL_TEMPO": [
        {
            "name": "Classic Tempo Run",
            "duration": "20-40 minutes",
            "structure": "15-20 min easy warmup + 20-40 min tempo + 10-15 min easy cooldown",
            "description": "Continuous run at lactate threshold pace",
            "benefits": "Improves lactate clearance, race pacing, mental toughness",
        },
        {
            "name": "Sandwich Tempo",
            "duration": "30-45 minutes total",
            "structure": "10-15 min easy + 15-20 min tempo + 5-10 min easy",
            "description": "Tempo effort sandwiched between easy running",
            "benefits": "Teaches body to settle into tempo rhythm, race simulation",
        },
    ],
    "TEMPO_INTERVALS": [
        {
            "name": "2x2 Mile Tempo",
            "duration": "45-50 minutes total",
            "structure": "Warmup + 2x2 miles @ tempo with 3 min recovery + Cooldown",
            "description": "Two 2-mile repeats at threshold pace",
            "benefits": "Mental preparation for longer races, pacing practice",
        },
        {
            "name": "Cruise Intervals",
            "duration": "30-40 minutes total",
            "structure": "Warmup + 4-6 x 3-8 min @ tempo with 1-2 min recovery + Cooldown",
            "description": "Multiple medium-length intervals at threshold pace",
            "benefits": "Accumulates time at threshold, teaches recovery between efforts",
        },
    ],
    "ALTERNATING_TEMPO": [
        {
            "name": "Tempo Minutes",
            "duration": "20-60 minutes total",
            "structure": "Warmup + Alternate 1 min tempo / 1 min easy x 10-30 + Cooldown",
            "description": "Alternate tempo and easy minutes without stopping",
            "benefits": "Avoids going too fast, accumulates threshold time",
        },
        {
            "name": "2 Minutes On/Off",
            "duration": "32-48 minutes total",
            "structure": "Warmup + 8-12 x (2 min tempo / 2 min easy) + Cooldown",
            "description": "Longer alternating segments for advanced athletes",
            "benefits": "Extended time in tempo zone, teaches rhythm",
        },
    ],
    "PROGRESSIVE_TEMPO": [
        {
            "name": "Build-Up Tempo",
            "duration": "25-35 minutes",
            "structure": "Warmup + 10 min @ marathon pace + 10 min @ threshold pace + 5 min @ 10K pace + Cooldown",
            "description": "Tempo that steps down from marathon pace to 10K pace",
            "benefits": "Pace awareness, finishing strength",
        },
    ],
    "RACE_SPECIFIC": [
        {
            "name": "Half Marathon Pace Tempo",
            "duration": "30-50 minutes",
            "structure": "Warmup + 2-3 x 2 miles @ half marathon pace with 2 min recovery + Cooldown",
            "description": "Goal-pace rehearsal for half marathon racing",
            "benefits": "Race pace confidence, fueling practice",
        },
    ],
}

INTERVAL_LIBRARY: dict[str, list[dict[str, Any]]] = {
    "SHORT_SPEED": [
        {
            "name": "Classic 200m Repeats",
            "distance": "200m",
            "repetitions": "6-12 x 200m",
            "recovery": "200m walk/jog (2-3 minutes)",
            "description": "Short speed bursts for neuromuscular development",
            "pace": "800m race pace",
            "benefits": "Leg turnover, running economy, speed development",
        },
        {
            "name": "400m Speed Intervals",
            "distance": "400m",
            "repetitions": "5-10 x 400m",
            "recovery": "400m jog (3-4 minutes)",
            "description": "Classic one-lap speed intervals at 5K pace",
            "pace": "Mile to 5K race pace",
            "benefits": "Speed endurance, lactate tolerance, mental toughness",
        },
    ],
    "VO2_MAX": [
        {
            "name": "800m Track Intervals",
            "distance": "800m",
            "repetitions": "4-8 x 800m",
            "recovery": "400m jog (2-3 minutes)",
            "description": "Two-lap intervals at VO2 max effort",
            "pace": "3K to 5K race pace",
            "benefits": "Speed endurance, lactate processing, mental strength",
        },
        {
            "name": "1000m VO2 Max Intervals",
            "distance": "1000m",
            "repetitions": "3-6 x 1000m",
            "recovery": "Equal time recovery (3-4 minutes jog)",
            "description": "Classic VO2 max development intervals at 5K race pace",
            "pace": "5K race pace",
            "benefits": "Aerobic power, VO2 max improvement, race preparation",
        },
        {
            "name": "2-Minute VO2 Intervals",
            "distance": "2 minutes",
            "repetitions": "4-8 x 2 minutes",
            "recovery": "2 minutes easy jog",
            "description": "Time-based VO2 max intervals",
            "pace": "5K effort",
            "benefits": "VO2 max development without track access",
        },
    ],
    "LONG_INTERVALS": [
        {
            "name": "1200m Repeats",
            "distance": "1200m",
            "repetitions": "3-5 x 1200m",
            "recovery": "400m jog (3-4 minutes)",
            "description": "Sustained speed at 10K pace",
            "pace": "10K race pace",
            "benefits": "Extended time near VO2 max, pacing discipline",
        },
        {
            "name": "Mile Repeats",
            "distance": "1 mile",
            "repetitions": "3-5 x 1 mile",
            "recovery": "3 minutes easy jog",
            "description": "Classic mile repeats at 10K pace",
            "pace": "10K race pace",
            "benefits": "Race-specific endurance, mental toughness",
        },
    ],
    "MIXED_INTERVALS": [
        {
            "name": "Ladder Intervals",
            "distance": "Variable",
            "repetitions": "400-800-1200-800-400m",
            "recovery": "Half distance jog between reps",
            "description": "Ascending and descending interval distances at 5K pace",
            "pace": "5K race pace throughout",
            "benefits": "Variety, mental engagement, comprehensive VO2 stimulus",
        },
    ],
    "RACE_SIMULATION": [
        {
            "name": "Race Pace 800s",
            "distance": "800m",
            "repetitions": "6-10 x 800m",
            "recovery": "90 seconds jog",
            "description": "Short recovery repeats that rehearse goal race rhythm",
            "pace": "5K race pace",
            "benefits": "Pace judgement under fatigue",
        },
    ],
}

LONG_RUN_LIBRARY: dict[str, list[dict[str, Any]]] = {
    "TRADITIONAL_EASY": [
        {
            "name": "Classic Easy Long Run",
            "duration": "60-150 minutes",
            "structure": "Entire run at easy, conversational pace",
            "description": "Traditional base-building long run",
            "benefits": "Aerobic development, time on feet, mental endurance",
        },
        {
            "name": "Conversational Long Run",
            "duration": "75-120 minutes",
            "structure": "Run with partner/group, maintain conversation throughout",
            "description": "Easy long run emphasizing conversational pace",
            "benefits": "Aerobic base, social aspect, pace discipline",
        },
    ],
    "PROGRESSIVE_RUNS": [
        {
            "name": "Thirds Progression",
            "duration": "45-90 minutes",
            "structure": "First 1/3 @ easy pace, middle 1/3 moderate, final 1/3 @ marathon pace",
            "description": "Equal segments with increasing intensity",
            "benefits": "Teaches finishing speed, energy conservation",
        },
        {
            "name": "Super Fast Finish",
            "duration": "50-90 minutes",
            "structure": "Normal easy run + final 3-6 minutes at 5K pace",
            "description": "Easy run with explosive final minutes",
            "benefits": "Finishing kick practice, speed on tired legs",
        },
    ],
    "STEADY_STATE_LONG": [
        {
            "name": "Marathon Pace Long Run",
            "duration": "60-120 minutes",
            "structure": "15-20 min easy warmup + 20-60 min @ marathon pace + 10-15 min easy",
            "description": "Long run with a sustained marathon pace block",
            "benefits": "Race-specific endurance, fueling practice",
        },
    ],
    "MIXED_PACE_LONG": [
        {
            "name": "Alternating Pace Long Run",
            "duration": "75-120 minutes",
            "structure": "Alternate 2 miles @ easy pace with 1 mile @ marathon pace",
            "description": "Marathon pace segments woven into easy running",
            "benefits": "Pace changes on tired legs",
        },
    ],
    "RACE_SIMULATION": [
        {
            "name": "Dress Rehearsal Long Run",
            "duration": "90-150 minutes",
            "structure": "Race-morning routine, then easy pace with final 25% @ marathon pace",
            "description": "Full rehearsal of race-day logistics",
            "benefits": "Confidence, gear and fueling check",
        },
    ],
    "TERRAIN_SPECIFIC": [
        {
            "name": "Rolling Hills Long Run",
            "duration": "75-120 minutes",
            "structure": "Easy effort over rolling terrain, steady effort on climbs",
            "description": "Long run on a hilly course",
            "benefits": "Strength endurance for hilly races",
        },
    ],
    "RECOVERY_LONG": [
        {
            "name": "Recovery Long Run",
            "duration": "60-90 minutes",
            "structure": "Entire run slower than easy pace, walk breaks allowed",
            "description": "Extended time on feet at very low intensity",
            "benefits": "Aerobic maintenance while absorbing training",
        },
    ],
}

HILL_LIBRARY: dict[str, list[dict[str, Any]]] = {
    "short_power": [
        {
            "name": "Hill Strides",
            "duration": "10-15 seconds",
            "hill_requirement": {
                "grade": "moderate",
                "distance": "50-100 meters",
                "description": "Find a 4-7% grade hill, at least 50m long",
            },
            "workout": {
                "warmup": "15 min easy + 4x20sec strides on flat",
                "main": "6-8 x 12sec hill strides @ 90% effort",
                "recovery": "Walk/jog down + 1 min easy",
                "cooldown": "10-15 min easy",
            },
            "focus": "Neuromuscular power, running form, leg turnover",
        },
    ],
    "medium_vo2": [
        {
            "name": "Classic Hill Repeats",
            "duration": "2-3 minutes",
            "hill_requirement": {
                "grade": "moderate",
                "distance": "400-800 meters",
                "description": "Find a steady 4-7% grade",
            },
            "workout": {
                "warmup": "20 min easy + 3x30sec pickups",
                "main": "4-6 x 2.5 min uphill @ threshold effort",
                "recovery": "Jog/walk down + 90sec easy",
                "cooldown": "15 min easy",
            },
            "focus": "VO2 max, lactate threshold, hill running economy",
        },
        {
            "name": "90-Second Hill Repeats",
            "duration": "90 seconds",
            "hill_requirement": {
                "grade": "moderate",
                "distance": "300-400 meters",
                "description": "Find a 5-6% grade",
            },
            "workout": {
                "warmup": "15-20 min easy",
                "main": "6-10 x 90sec uphill @ VO2 max effort",
                "recovery": "Jog down easy",
                "cooldown": "10-15 min easy",
            },
            "focus": "Aerobic power on climbs",
        },
    ],
    "long_strength": [
        {
            "name": "Long Hill Grinders",
            "duration": "4-6 minutes",
            "hill_requirement": {
                "grade": "gentle",
                "distance": "800-1200 meters",
                "description": "Find a long 3-5% grade",
            },
            "workout": {
                "warmup": "20 min easy",
                "main": "3-4 x 5 min uphill @ tempo effort",
                "recovery": "Easy jog down",
                "cooldown": "15 min easy",
            },
            "focus": "Muscular endurance, strength for hilly races",
        },
    ],
    "hill_circuits": [
        {
            "name": "Hill Circuit",
            "duration": "30-40 minutes",
            "hill_requirement": {
                "grade": "moderate",
                "distance": "200-400 meters",
                "description": "Hill with a flat loop at the top",
            },
            "workout": {
                "warmup": "15 min easy",
                "main": "3-4 loops: uphill @ threshold effort, 2 min flat @ tempo effort, easy downhill",
                "recovery": "2 min easy between loops",
                "cooldown": "10 min easy",
            },
            "focus": "Strength and rhythm changes",
        },
    ],
    "downhill_specific": [
        {
            "name": "Controlled Downhills",
            "duration": "60-90 seconds",
            "hill_requirement": {
                "grade": "gentle",
                "distance": "300-500 meters",
                "description": "Smooth 2-4% descent with good footing",
            },
            "workout": {
                "warmup": "20 min easy",
                "main": "4-6 x 60-90sec downhill @ 10K pace, quick cadence",
                "recovery": "Walk back up",
                "cooldown": "15 min easy",
            },
            "focus": "Eccentric strength and downhill technique",
        },
    ],
    "specialty": [
        {
            "name": "Hill Fartlek",
            "duration": "30-45 minutes",
            "hill_requirement": {
                "grade": "rolling",
                "distance": "Any rolling route",
                "description": "Rolling route with several short climbs",
            },
            "workout": {
                "warmup": "15 min easy",
                "main": "Surge every climb @ 5K pace, easy pace on flats and descents",
                "recovery": "Easy running between climbs",
                "cooldown": "10 min easy",
            },
            "focus": "Unstructured strength and speed on terrain",
        },
    ],
}

# Kind value -> category -> raw templates
WORKOUT_LIBRARY: dict[str, dict[str, list[dict[str, Any]]]] = {
    "tempo": TEMPO_LIBRARY,
    "interval": INTERVAL_LIBRARY,
    "longrun": LONG_RUN_LIBRARY,
    "hill": HILL_LIBRARY,
}
