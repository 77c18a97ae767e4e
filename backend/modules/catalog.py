"""
Learning Hub catalog: the static list of featured learning paths and a
keyword/category/difficulty filter over it.
"""

from typing import Any


FEATURED_PATHS: list[dict[str, Any]] = [
    {
        "id": 1,
        "title": "Microservices Architecture",
        "description": "Learn how to design and implement scalable microservices",
        "difficulty": "Advanced",
        "duration": "45 min",
        "students": 1250,
        "rating": 4.8,
        "category": "Architecture",
        "trending": True,
        "scenario": "Building a scalable e-commerce platform with independent services",
    },
    {
        "id": 2,
        "title": "JWT Authentication",
        "description": "Secure your applications with JSON Web Tokens",
        "difficulty": "Intermediate",
        "duration": "30 min",
        "students": 2100,
        "rating": 4.9,
        "category": "Security",
        "trending": False,
        "scenario": "Implementing secure user authentication in a SaaS application",
    },
    {
        "id": 3,
        "title": "React Context & State Management",
        "description": "Master state management patterns in React applications",
        "difficulty": "Intermediate",
        "duration": "35 min",
        "students": 1850,
        "rating": 4.7,
        "category": "Frontend",
        "trending": True,
        "scenario": "Managing global state in a large React dashboard application",
    },
    {
        "id": 4,
        "title": "Docker Containerization",
        "description": "Package and deploy applications with Docker containers",
        "difficulty": "Beginner",
        "duration": "40 min",
        "students": 3200,
        "rating": 4.6,
        "category": "DevOps",
        "trending": False,
        "scenario": "Containerizing a Node.js application for consistent deployments",
    },
    {
        "id": 5,
        "title": "GraphQL API Design",
        "description": "Build efficient APIs with GraphQL query language",
        "difficulty": "Advanced",
        "duration": "50 min",
        "students": 980,
        "rating": 4.8,
        "category": "Backend",
        "trending": True,
        "scenario": "Creating a flexible API for a mobile app backend",
    },
    {
        "id": 6,
        "title": "Redis Caching Strategies",
        "description": "Improve application performance with smart caching",
        "difficulty": "Intermediate",
        "duration": "25 min",
        "students": 1400,
        "rating": 4.5,
        "category": "Performance",
        "trending": False,
        "scenario": "Optimizing database queries in a high-traffic web application",
    },
]

CATEGORIES = ["All", "Frontend", "Backend", "Architecture", "Security", "DevOps", "Performance"]
DIFFICULTY_LEVELS = ["All", "Beginner", "Intermediate", "Advanced"]


def search_paths(query: str = "", category: str = "All", difficulty: str = "All") -> list[dict]:
    """Case-insensitive substring match on title or description, plus exact filters."""
    needle = query.strip().lower()
    results = []
    for path in FEATURED_PATHS:
        if needle and needle not in path["title"].lower() and needle not in path["description"].lower():
            continue
        if category != "All" and path["category"] != category:
            continue
        if difficulty != "All" and path["difficulty"] != difficulty:
            continue
        results.append(path)
    return results


def trending_paths() -> list[dict]:
    return [p for p in FEATURED_PATHS if p["trending"]]
