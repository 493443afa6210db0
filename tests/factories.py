"""
Payload builders shared by the test modules
"""
from typing import Dict

from faker import Faker

fake = Faker()

TEST_PASSWORD = 'testpassword123'


def make_topic_payload(**overrides) -> Dict:
    """Valid create-topic payload; unique title unless overridden"""
    payload = {
        'title': f"{fake.catch_phrase()} {fake.unique.random_int(1, 10**6)}",
        'description': fake.sentence(nb_words=12),
        'category': 'web',
        'difficulty': 'intermediate',
        'duration': '8 weeks',
        'popularity': 50,
        'complexity': 5,
        'technologies': ['Python', 'FastAPI'],
    }
    payload.update(overrides)
    return payload


def make_submission(topic_count: int = 3, **overrides) -> Dict:
    """Proposal submission payload with minimal topic entries"""
    payload = {
        'user': {'userId': 'user_1', 'name': fake.name(), 'email': fake.email()},
        'selectedTopics': [{'title': f'Topic {i}'} for i in range(topic_count)],
        'generatedProposal': {'title': 'Smart Campus', 'description': 'A combined project'},
    }
    payload.update(overrides)
    return payload
