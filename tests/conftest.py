"""
ProposalHub - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Dict, List
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker

# Set testing environment (before the app reads its settings)
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_proposalhub.db'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_LEVEL'] = 'WARNING'

from app.main import app
from app.core.database import Base, get_db
from app.core.security import get_password_hash
from app.models.user import UserAccount, UserRole
from app.models.project_topic import ProjectTopic, title_key
from tests.factories import fake, make_topic_payload, make_submission, TEST_PASSWORD


# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_proposalhub.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)
TestSessionLocal = sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)



@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def registration_data() -> Dict:
    """Valid registration payload (camelCase, as clients send it)"""
    return {
        'fullName': fake.name(),
        'email': fake.unique.email(),
        'password': TEST_PASSWORD,
        'confirmPassword': TEST_PASSWORD,
        'role': 'student',
    }


@pytest.fixture
async def test_account(db_session: AsyncSession) -> UserAccount:
    """Create a stored account with a known password"""
    account = UserAccount(
        email=fake.unique.email(),
        hashed_password=get_password_hash(TEST_PASSWORD),
        full_name=fake.name(),
        role=UserRole.STUDENT,
    )
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


@pytest.fixture
def topic_payload() -> Dict:
    """Valid create-topic payload"""
    return make_topic_payload()


@pytest.fixture
async def stored_topics(db_session: AsyncSession) -> List[ProjectTopic]:
    """A small catalog: mixed categories, one trending, one inactive"""
    rows = [
        make_topic_payload(title='E-commerce Platform', category='web', popularity=85, is_trending=True),
        make_topic_payload(title='Mobile Banking App', category='mobile', difficulty='advanced', popularity=90),
        make_topic_payload(title='AI Chatbot', category='ai', popularity=88, description='NLP chatbot for support'),
        make_topic_payload(title='Retired Topic', category='web', popularity=99, is_trending=True),
    ]
    topics = []
    for row in rows:
        topic = ProjectTopic(title_key=title_key(row["title"]), **row)
        db_session.add(topic)
        topics.append(topic)
    topics[-1].is_active = False
    await db_session.commit()
    for topic in topics:
        await db_session.refresh(topic)
    return topics




@pytest.fixture
def submission() -> Dict:
    """Valid proposal submission payload"""
    return make_submission()
