"""Goal-time reference table for training paces.

Each row maps a race goal time to per-mile training paces:
(goal, (easy_min, easy_max), marathon, threshold, interval,
 threshold splits (1200m, 800m, 600m), interval splits (400m, 300m, 200m)).

Rows are simplified approximations of published VDOT tables and are used
as interpolation anchors by the pace engine.
"""

from __future__ import annotations

from plancore.models import DistanceCategory

PaceRow = tuple[str, tuple[str, str], str, str, str, tuple[str, str, str], tuple[str, str, str]]

THRESHOLD_SPLITS: tuple[str, ...] = ("1200m", "800m", "600m")
INTERVAL_SPLITS: tuple[str, ...] = ("400m", "300m", "200m")

_MARATHON: list[PaceRow] = [
    ("6:00:00", ("12:52", "14:04"), "13:38", "11:42", "10:00", ("8:43", "5:49", "4:22"), ("2:29", "1:53", "1:15")),
    ("5:45:00", ("12:35", "13:45"), "13:05", "11:20", "9:46", ("8:27", "5:38", "4:13"), ("2:26", "1:49", "1:13")),
    ("5:30:00", ("12:17", "13:26"), "12:32", "10:57", "9:31", ("8:10", "5:27", "4:05"), ("2:22", "1:46", "1:11")),
    ("5:15:00", ("11:58", "13:06"), "11:58", "10:34", "9:16", ("7:53", "5:15", "3:57"), ("2:18", "1:44", "1:09")),
    ("5:00:00", ("11:38", "12:45"), "11:25", "10:11", "9:00", ("7:36", "5:04", "3:48"), ("2:14", "1:41", "1:07")),
    ("4:45:00", ("11:18", "12:23"), "10:51", "9:47", "8:43", ("7:18", "4:52", "3:39"), ("2:10", "1:38", "1:05")),
    ("4:30:00", ("10:57", "12:00"), "10:17", "9:22", "8:26", ("6:59", "4:40", "3:30"), ("2:06", "1:34", "1:03")),
    ("4:15:00", ("10:34", "11:36"), "9:43", "8:57", "8:08", ("6:41", "4:27", "3:20"), ("2:01", "1:31", "1:01")),
    ("4:00:00", ("10:11", "11:11"), "9:09", "8:32", "7:50", ("6:22", "4:14", "3:11"), ("1:57", "1:28", "0:58")),
    ("3:45:00", ("9:39", "10:36"), "8:35", "8:02", "7:24", ("6:00", "4:00", "3:00"), ("1:50", "1:23", "0:55")),
    ("3:30:00", ("9:02", "9:56"), "8:01", "7:31", "6:55", ("5:36", "3:44", "2:48"), ("1:43", "1:17", "0:52")),
    ("3:15:00", ("8:25", "9:16"), "7:26", "7:00", "6:26", ("5:13", "3:29", "2:37"), ("1:36", "1:12", "0:48")),
    ("3:00:00", ("7:48", "8:36"), "6:52", "6:29", "5:58", ("4:50", "3:13", "2:25"), ("1:29", "1:07", "0:44")),
    ("2:45:00", ("7:11", "7:55"), "6:18", "5:58", "5:29", ("4:27", "2:58", "2:13"), ("1:22", "1:01", "0:41")),
    ("2:30:00", ("6:33", "7:14"), "5:43", "5:27", "5:01", ("4:04", "2:42", "2:02"), ("1:15", "0:56", "0:37")),
    ("2:15:00", ("5:56", "6:33"), "5:09", "4:56", "4:32", ("3:40", "2:27", "1:50"), ("1:08", "0:51", "0:34")),
    ("2:00:00", ("5:18", "5:51"), "4:34", "4:25", "4:04", ("3:17", "2:12", "1:39"), ("1:01", "0:45", "0:30")),
]

_TEN_K: list[PaceRow] = [
    ("80:00", ("13:14", "14:28"), "14:04", "11:58", "10:11", ("8:56", "5:58", "4:28"), ("2:32", "1:54", "1:16")),
    ("70:00", ("12:18", "13:27"), "12:35", "10:59", "9:33", ("8:12", "5:28", "4:06"), ("2:23", "1:47", "1:11")),
    ("60:00", ("11:11", "12:15"), "10:58", "9:48", "8:39", ("7:19", "4:53", "3:40"), ("2:09", "1:37", "1:04")),
    ("55:00", ("10:32", "11:32"), "10:15", "9:09", "8:08", ("6:50", "4:33", "3:25"), ("2:01", "1:31", "1:01")),
    ("50:00", ("9:51", "10:48"), "9:29", "8:29", "7:35", ("6:20", "4:13", "3:10"), ("1:53", "1:25", "0:57")),
    ("45:00", ("9:07", "10:00"), "8:41", "7:46", "6:58", ("5:48", "3:52", "2:54"), ("1:44", "1:18", "0:52")),
    ("42:00", ("8:42", "9:32"), "8:15", "7:23", "6:38", ("5:31", "3:40", "2:45"), ("1:39", "1:14", "0:50")),
    ("38:00", ("8:07", "8:56"), "7:36", "6:51", "6:10", ("5:07", "3:24", "2:33"), ("1:32", "1:09", "0:46")),
    ("32:00", ("7:13", "7:56"), "6:40", "6:03", "5:28", ("4:31", "3:01", "2:16"), ("1:22", "1:01", "0:41")),
]

_HALF: list[PaceRow] = [
    ("3:00:00", ("12:59", "14:11"), "13:51", "11:50", "10:05", ("8:50", "5:53", "4:25"), ("2:30", "1:53", "1:15")),
    ("2:45:00", ("12:25", "13:34"), "12:46", "11:07", "9:37", ("8:17", "5:32", "4:09"), ("2:23", "1:48", "1:12")),
    ("2:30:00", ("11:48", "12:55"), "11:40", "10:22", "9:07", ("7:44", "5:09", "3:52"), ("2:16", "1:42", "1:08")),
    ("2:15:00", ("11:07", "12:12"), "10:34", "9:35", "8:35", ("7:08", "4:46", "3:34"), ("2:08", "1:36", "1:04")),
    ("2:00:00", ("10:23", "11:24"), "9:27", "8:45", "7:59", ("6:32", "4:21", "3:16"), ("1:59", "1:29", "1:00")),
    ("1:45:00", ("9:21", "10:17"), "8:19", "7:48", "7:10", ("5:49", "3:52", "2:54"), ("1:47", "1:20", "0:53")),
    ("1:30:00", ("8:07", "8:56"), "7:09", "6:45", "6:12", ("5:02", "3:21", "2:31"), ("1:33", "1:09", "0:46")),
    ("1:15:00", ("6:51", "7:33"), "5:59", "5:41", "5:14", ("4:14", "2:49", "2:07"), ("1:18", "0:58", "0:39")),
    ("1:00:00", ("5:33", "6:07"), "4:47", "4:36", "4:15", ("3:26", "2:17", "1:43"), ("1:03", "0:47", "0:32")),
]

# 5K goal times equivalent to each 10K anchor (10K time / 2.075); training paces are shared.
_FIVE_K_EQUIVALENTS: dict[str, str] = {
    "80:00": "38:33",
    "70:00": "33:44",
    "60:00": "28:55",
    "55:00": "26:30",
    "50:00": "24:06",
    "45:00": "21:41",
    "42:00": "20:14",
    "38:00": "18:19",
    "32:00": "15:25",
}

_FIVE_K: list[PaceRow] = [(_FIVE_K_EQUIVALENTS[row[0]],) + row[1:] for row in _TEN_K]

PACE_TABLES: dict[DistanceCategory, list[PaceRow]] = {
    DistanceCategory.FIVE_K: _FIVE_K,
    DistanceCategory.TEN_K: _TEN_K,
    DistanceCategory.HALF: _HALF,
    DistanceCategory.MARATHON: _MARATHON,
}

# Conservative race-time estimates per VDOT level, used when no recent race exists.
VDOT_RACE_TIMES: dict[int, dict[DistanceCategory, str]] = {
    25: {DistanceCategory.FIVE_K: "31:20", DistanceCategory.TEN_K: "65:00", DistanceCategory.HALF: "2:35:00", DistanceCategory.MARATHON: "5:30:00"},
    30: {DistanceCategory.FIVE_K: "27:57", DistanceCategory.TEN_K: "58:00", DistanceCategory.HALF: "2:15:00", DistanceCategory.MARATHON: "4:45:00"},
    32: {DistanceCategory.FIVE_K: "26:30", DistanceCategory.TEN_K: "55:00", DistanceCategory.HALF: "2:08:00", DistanceCategory.MARATHON: "4:30:00"},
    34: {DistanceCategory.FIVE_K: "25:04", DistanceCategory.TEN_K: "52:00", DistanceCategory.HALF: "2:02:00", DistanceCategory.MARATHON: "4:15:00"},
    36: {DistanceCategory.FIVE_K: "23:51", DistanceCategory.TEN_K: "49:30", DistanceCategory.HALF: "1:56:00", DistanceCategory.MARATHON: "4:02:00"},
    38: {DistanceCategory.FIVE_K: "22:39", DistanceCategory.TEN_K: "47:00", DistanceCategory.HALF: "1:50:00", DistanceCategory.MARATHON: "3:50:00"},
    40: {DistanceCategory.FIVE_K: "21:41", DistanceCategory.TEN_K: "45:00", DistanceCategory.HALF: "1:45:00", DistanceCategory.MARATHON: "3:40:00"},
    42: {DistanceCategory.FIVE_K: "20:43", DistanceCategory.TEN_K: "43:00", DistanceCategory.HALF: "1:40:00", DistanceCategory.MARATHON: "3:30:00"},
    45: {DistanceCategory.FIVE_K: "19:31", DistanceCategory.TEN_K: "40:30", DistanceCategory.HALF: "1:33:00", DistanceCategory.MARATHON: "3:15:00"},
    50: {DistanceCategory.FIVE_K: "17:50", DistanceCategory.TEN_K: "37:00", DistanceCategory.HALF: "1:23:00", DistanceCategory.MARATHON: "2:55:00"},
}
