"""First-run catalogue seed data.

Each table is seeded only while it is empty, so restarts never
duplicate rows and user edits are never overwritten.
"""

from __future__ import annotations

import json
import sqlite3

import structlog

logger = structlog.get_logger(__name__)

NOTES_URL = "https://www.w3.org/WAI/ER/tests/xhtml/testfiles/resources/pdf/dummy.pdf"
DEFAULT_VIDEO_URL = "https://www.youtube.com/embed/dQw4w9WgXcQ"

# (title, description, department, instructor, image, video_url)
COURSES = [
    ("Data Structures & Algorithms", "Master arrays, linked lists, trees, and graphs.", "CSE", "Prof. Alan", "https://picsum.photos/seed/dsa/400/250", "https://www.youtube.com/embed/8hly31xKli0"),
    ("Java Programming", "Learn core Java and object-oriented principles.", "CSE", "Dr. Smith", "https://picsum.photos/seed/java/400/250", "https://www.youtube.com/embed/eIrMb6n6n8E"),
    ("Database Management Systems", "SQL, normalization, and database design.", "CSE", "Prof. Sarah", "https://picsum.photos/seed/dbms/400/250", "https://www.youtube.com/embed/HXV3zeQKqGY"),
    ("Object Oriented Programming", "Classes, inheritance, and polymorphism.", "CSE", "Dr. Robert", "https://picsum.photos/seed/oops/400/250", "https://www.youtube.com/embed/pTB0EiLXUC8"),
    ("Operating Systems", "Process management, memory, and file systems.", "CSE", "Prof. Kim", "https://picsum.photos/seed/os/400/250", "https://www.youtube.com/embed/vBURTt97EkA"),
    ("Digital Logic Design", "Boolean algebra, gates, and flip-flops.", "ECE", "Prof. Jane", "https://picsum.photos/seed/logic/400/250", "https://www.youtube.com/embed/CeD2L6KbtVM"),
    ("VLSI Design", "CMOS technology and chip fabrication.", "ECE", "Dr. Robert", "https://picsum.photos/seed/vlsi/400/250", "https://www.youtube.com/embed/9SnR3M3C34I"),
    ("Microprocessors", "Architecture and assembly language.", "ECE", "Prof. Kim", "https://picsum.photos/seed/micro/400/250", "https://www.youtube.com/embed/CeD2L6KbtVM"),
    ("Signals & Systems", "Fourier transforms and signal analysis.", "ECE", "Eng. Dave", "https://picsum.photos/seed/signals/400/250", "https://www.youtube.com/embed/CeD2L6KbtVM"),
    ("Business Analytics", "Data-driven decision making.", "MBA", "Dr. Miller", "https://picsum.photos/seed/analytics/400/250", DEFAULT_VIDEO_URL),
    ("Financial Management", "Corporate finance and investment.", "MBA", "Prof. Alice", "https://picsum.photos/seed/finance/400/250", DEFAULT_VIDEO_URL),
    ("Marketing Strategy", "Brand building and market research.", "MBA", "Dr. Wilson", "https://picsum.photos/seed/marketing/400/250", DEFAULT_VIDEO_URL),
    ("Thermodynamics", "Energy, heat, and work principles.", "Mechanical", "Eng. Brown", "https://picsum.photos/seed/mech/400/250", DEFAULT_VIDEO_URL),
    ("Manufacturing Process", "Casting, welding, and machining.", "Mechanical", "Dr. White", "https://picsum.photos/seed/cad/400/250", DEFAULT_VIDEO_URL),
    ("Machine Design", "Design of mechanical components.", "Mechanical", "Prof. Stark", "https://picsum.photos/seed/robotics/400/250", DEFAULT_VIDEO_URL),
    ("Structural Engineering", "Analysis of beams, columns, and frames.", "Civil", "Dr. Lee", "https://picsum.photos/seed/civil/400/250", DEFAULT_VIDEO_URL),
    ("Surveying", "Measurement and mapping of land.", "Civil", "Eng. Stone", "https://picsum.photos/seed/survey/400/250", DEFAULT_VIDEO_URL),
    ("Hydraulics", "Fluid flow in pipes and channels.", "Civil", "Prof. Green", "https://picsum.photos/seed/water/400/250", DEFAULT_VIDEO_URL),
]

# (title, price, seller_id, department, image, location, stock)
BOOKS = [
    ("Cracking the Coding Interview", 450, 1, "CSE", "https://picsum.photos/seed/ctci/300/400", "Library", 5),
    ("Introduction to Algorithms", 800, 1, "CSE", "https://picsum.photos/seed/clrs/300/400", "Block A", 0),
    ("Principles of Management", 300, 2, "MBA", "https://picsum.photos/seed/mgmt/300/400", "MBA Block", 2),
    ("Structural Analysis", 550, 2, "Civil", "https://picsum.photos/seed/struct/300/400", "Civil Dept", 1),
]

# Contest with its questions: (question, options, correct_option)
CONTESTS = [
    {
        "title": "Weekly Aptitude Challenge #1",
        "date": "2026-03-05",
        "description": "Test your logical reasoning and quantitative skills.",
        "questions": [
            ("What is the next number in the sequence: 2, 6, 12, 20, 30, ...?", ["36", "40", "42", "48"], 2),
            ("If a train travels 60 km in 45 minutes, what is its speed in km/h?", ["75", "80", "90", "100"], 1),
            ("A father is 3 times as old as his son. In 12 years, he will be twice as old. How old is the son now?", ["10", "12", "15", "18"], 1),
            ("Which word does not belong with the others?", ["Leopard", "Cougar", "Tiger", "Wolf"], 3),
            ("If 5 workers can build a wall in 12 days, how many days will 10 workers take?", ["4", "6", "8", "10"], 1),
            ("What is 15% of 200?", ["20", "25", "30", "35"], 2),
            ("Find the odd one out.", ["Square", "Circle", "Rectangle", "Triangle"], 1),
            ("If RED is coded as 27, how is BLUE coded?", ["36", "40", "44", "48"], 1),
        ],
    },
    {
        "title": "Bi-Weekly Coding Sprint",
        "date": "2026-03-12",
        "description": "Solve 5 algorithmic problems in 2 hours.",
        "questions": [
            ("What is the time complexity of searching in a balanced BST?", ["O(1)", "O(n)", "O(log n)", "O(n^2)"], 2),
            ("Which data structure uses LIFO principle?", ["Queue", "Stack", "Linked List", "Array"], 1),
            ("What is the result of 5 + '5' in JavaScript?", ["10", "55", "Error", "NaN"], 1),
            ("Which keyword is used to define a constant in JS?", ["var", "let", "const", "static"], 2),
        ],
    },
]


def _is_empty(conn: sqlite3.Connection, table: str) -> bool:
    row = conn.execute(f"SELECT COUNT(*) AS count FROM {table}").fetchone()
    return row["count"] == 0


def seed_database(conn: sqlite3.Connection) -> dict[str, int]:
    """Insert catalogue seed data into empty tables.

    Args:
        conn: Open database connection (schema already migrated)

    Returns:
        Rows inserted per table (tables that already had data are omitted)
    """
    inserted: dict[str, int] = {}

    if _is_empty(conn, "courses"):
        conn.executemany(
            """
            INSERT INTO courses (
                title, description, department, instructor,
                image, notes_url, video_url
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (title, description, dept, instructor, image, NOTES_URL, video)
                for title, description, dept, instructor, image, video in COURSES
            ],
        )
        inserted["courses"] = len(COURSES)

    if _is_empty(conn, "books"):
        conn.executemany(
            """
            INSERT INTO books (
                title, price, seller_id, department, image, location, stock
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            BOOKS,
        )
        inserted["books"] = len(BOOKS)

    if _is_empty(conn, "contests"):
        question_count = 0
        for contest in CONTESTS:
            cursor = conn.execute(
                "INSERT INTO contests (title, date, description) VALUES (?, ?, ?)",
                (contest["title"], contest["date"], contest["description"]),
            )
            contest_id = cursor.lastrowid
            conn.executemany(
                """
                INSERT INTO questions (contest_id, question, options, correct_option)
                VALUES (?, ?, ?, ?)
                """,
                [
                    (contest_id, text, json.dumps(options), correct)
                    for text, options, correct in contest["questions"]
                ],
            )
            question_count += len(contest["questions"])
        inserted["contests"] = len(CONTESTS)
        inserted["questions"] = question_count

    if inserted:
        logger.info("database.seeded", **inserted)

    return inserted
