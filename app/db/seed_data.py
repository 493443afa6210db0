"""
Database Seed Data Module

Sample accounts, topics and proposals for local development.
Run with: python -m app.db.seed_data  (or: python -m app.db.seed_data clear)
"""
import asyncio
import copy
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import AsyncSessionLocal, init_db
from app.core.security import get_password_hash
from app.models.user import UserAccount, UserRole
from app.models.project_topic import ProjectTopic, title_key
from app.models.proposal import Proposal
from app.services.proposal_service import ProposalService


# ==================== Sample Data Constants ====================

SAMPLE_ACCOUNTS = [
    {"email": "student1@college.edu", "full_name": "Rahul Sharma", "role": UserRole.STUDENT},
    {"email": "student2@college.edu", "full_name": "Priya Patel", "role": UserRole.STUDENT},
    {"email": "faculty1@college.edu", "full_name": "Dr. Srinivas Kumar", "role": UserRole.FACULTY},
    {"email": "admin@proposalhub.dev", "full_name": "System Admin", "role": UserRole.ADMIN},
]

SAMPLE_TOPICS = [
    {"title": "E-commerce Platform", "description": "Build a full-stack e-commerce platform with React and Node.js", "category": "web", "difficulty": "intermediate", "duration": "8 weeks", "popularity": 85, "complexity": 7, "is_trending": True, "technologies": ["React", "Node.js", "MongoDB", "Express"]},
    {"title": "Mobile Banking App", "description": "Secure mobile banking application with biometric authentication", "category": "mobile", "difficulty": "advanced", "duration": "10 weeks", "popularity": 90, "complexity": 9, "is_trending": True, "technologies": ["React Native", "Firebase", "Node.js"]},
    {"title": "AI Chatbot", "description": "Intelligent chatbot using NLP for customer service", "category": "ai", "difficulty": "intermediate", "duration": "6 weeks", "popularity": 88, "complexity": 8, "is_trending": True, "technologies": ["Python", "TensorFlow", "FastAPI", "React"]},
    {"title": "Sales Analytics Dashboard", "description": "Interactive dashboard over historical sales data", "category": "data", "difficulty": "beginner", "duration": "4 weeks", "popularity": 64, "complexity": 4, "technologies": ["Python", "Pandas", "Plotly"]},
    {"title": "IoT Home Automation", "description": "Smart home automation system using IoT devices", "category": "iot", "difficulty": "intermediate", "duration": "9 weeks", "popularity": 82, "complexity": 7, "technologies": ["Arduino", "Raspberry Pi", "Python", "React Native"]},
    {"title": "Blockchain Voting System", "description": "Secure voting system using blockchain technology", "category": "blockchain", "difficulty": "advanced", "duration": "12 weeks", "popularity": 92, "complexity": 9, "is_trending": True, "technologies": ["Solidity", "Ethereum", "Web3.js", "React"]},
    {"title": "Cybersecurity Dashboard", "description": "Real-time cybersecurity threat monitoring dashboard", "category": "cybersecurity", "difficulty": "advanced", "duration": "10 weeks", "popularity": 87, "complexity": 8, "technologies": ["Python", "Django", "React", "Docker"]},
]

SAMPLE_PROPOSALS = [
    {
        "user": {
            "userId": "user_12345",
            "name": "John Doe",
            "email": "john@example.com",
            "studentId": "STU001",
            "department": "Computer Science",
            "semester": "8th",
        },
        "selectedTopics": [
            {"topicId": "topic_1", "title": "E-commerce Platform", "category": "web", "difficulty": "intermediate", "description": "Build a full-stack e-commerce platform with React and Node.js", "technologies": ["React", "Node.js", "MongoDB", "Express"], "duration": "8 weeks", "complexity": 7, "popularity": 85, "image": ""},
            {"topicId": "topic_2", "title": "Mobile Banking App", "category": "mobile", "difficulty": "advanced", "description": "Secure mobile banking application with biometric authentication", "technologies": ["React Native", "Firebase", "Node.js", "MongoDB"], "duration": "10 weeks", "complexity": 9, "popularity": 90, "image": ""},
            {"topicId": "topic_3", "title": "AI Chatbot", "category": "ai", "difficulty": "intermediate", "description": "Intelligent chatbot using NLP for customer service", "technologies": ["Python", "TensorFlow", "FastAPI", "React"], "duration": "6 weeks", "complexity": 8, "popularity": 88, "image": ""},
        ],
        "generatedProposal": {
            "title": "John Doe's Web + Mobile + AI Project Proposal",
            "description": "A comprehensive project combining e-commerce, mobile banking, and AI chatbot technologies to create an innovative financial solution.",
            "objectives": [
                "Develop a secure mobile banking application",
                "Implement AI-powered customer support chatbot",
                "Create an e-commerce platform for financial products",
                "Ensure data security and privacy compliance",
            ],
            "scope": "Integration of mobile banking, e-commerce, and AI chatbot systems",
            "methodology": "Agile development with 2-week sprints",
            "expectedOutcomes": [
                "Fully functional mobile banking app",
                "AI chatbot for customer support",
                "E-commerce platform integration",
                "Complete documentation and testing",
            ],
            "timeline": "12-14 weeks",
            "resourcesNeeded": [
                "Development team (4 members)",
                "Cloud hosting (AWS/Azure)",
                "AI/ML training resources",
                "Security audit tools",
            ],
            "budgetEstimate": "$18,000 - $25,000",
        },
        "status": "pending",
    },
    {
        "user": {
            "userId": "user_67890",
            "name": "Jane Smith",
            "email": "jane@example.com",
            "studentId": "STU002",
            "department": "Software Engineering",
            "semester": "7th",
        },
        "selectedTopics": [
            {"topicId": "topic_4", "title": "IoT Home Automation", "category": "iot", "difficulty": "intermediate", "description": "Smart home automation system using IoT devices", "technologies": ["Arduino", "Raspberry Pi", "Python", "React Native"], "duration": "9 weeks", "complexity": 7, "popularity": 82, "image": ""},
            {"topicId": "topic_5", "title": "Blockchain Voting System", "category": "blockchain", "difficulty": "advanced", "description": "Secure voting system using blockchain technology", "technologies": ["Solidity", "Ethereum", "Web3.js", "React"], "duration": "12 weeks", "complexity": 9, "popularity": 92, "image": ""},
            {"topicId": "topic_6", "title": "Cybersecurity Dashboard", "category": "cybersecurity", "difficulty": "advanced", "description": "Real-time cybersecurity threat monitoring dashboard", "technologies": ["Python", "Django", "React", "Docker"], "duration": "10 weeks", "complexity": 8, "popularity": 87, "image": ""},
        ],
        "generatedProposal": {
            "title": "Jane Smith's IoT + Blockchain + Cybersecurity Project",
            "description": "An integrated security system combining IoT sensors, blockchain verification, and cybersecurity monitoring.",
            "objectives": [
                "Develop IoT-based home automation system",
                "Implement blockchain-based secure voting",
                "Create real-time cybersecurity dashboard",
                "Ensure system integrity and security",
            ],
            "scope": "IoT device integration with blockchain security layer and monitoring dashboard",
            "methodology": "Waterfall methodology with security-first approach",
            "expectedOutcomes": [
                "Working IoT home automation system",
                "Blockchain voting prototype",
                "Cybersecurity monitoring dashboard",
                "Security audit report",
            ],
            "timeline": "14-16 weeks",
            "resourcesNeeded": [
                "IoT devices and sensors",
                "Blockchain development tools",
                "Security testing tools",
                "Cloud infrastructure",
            ],
            "budgetEstimate": "$22,000 - $30,000",
        },
        "status": "approved",
    },
]


def sample_proposals() -> List[dict]:
    """Deep copy, so callers can't mutate the module-level samples"""
    return copy.deepcopy(SAMPLE_PROPOSALS)


# ==================== Seed Functions ====================

async def seed_accounts(db: AsyncSession) -> List[UserAccount]:
    """Create sample accounts (all share one development password)"""
    accounts = []
    default_password = get_password_hash("Password123!")

    for data in SAMPLE_ACCOUNTS:
        existing = await db.execute(select(UserAccount).where(UserAccount.email == data["email"]))
        if existing.scalar_one_or_none():
            continue
        account = UserAccount(
            email=data["email"],
            full_name=data["full_name"],
            role=data["role"],
            hashed_password=default_password,
        )
        db.add(account)
        accounts.append(account)

    await db.flush()
    print(f"Created {len(accounts)} accounts")
    return accounts


async def seed_topics(db: AsyncSession) -> List[ProjectTopic]:
    """Create sample topics, skipping titles that already exist"""
    topics = []
    for data in SAMPLE_TOPICS:
        key = title_key(data["title"])
        existing = await db.execute(select(ProjectTopic.id).where(ProjectTopic.title_key == key))
        if existing.scalar_one_or_none():
            continue
        topic = ProjectTopic(title_key=key, **data)
        db.add(topic)
        topics.append(topic)

    await db.flush()
    print(f"Created {len(topics)} project topics")
    return topics


async def seed_all():
    """Seed all sample data"""
    print("=" * 50)
    print("Starting database seeding...")
    print("=" * 50)

    await init_db()

    async with AsyncSessionLocal() as db:
        try:
            await seed_accounts(db)
            await seed_topics(db)
            await db.commit()

            created = await ProposalService(db).create_samples(sample_proposals())
            print(f"Created {len(created)} sample proposals")

            print("=" * 50)
            print("Database seeding completed successfully!")
            print("=" * 50)

        except Exception as e:
            await db.rollback()
            print(f"Error seeding database: {e}")
            raise


async def clear_all():
    """Clear all data from database"""
    print("Clearing all data...")
    async with AsyncSessionLocal() as db:
        await db.execute(delete(Proposal))
        await db.execute(delete(ProjectTopic))
        await db.execute(delete(UserAccount))
        await db.commit()
        print("All data cleared!")


def main():
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())


if __name__ == "__main__":
    main()
