"""Demo data loaded at start-up, since the in-memory store starts empty."""

import logging
import random
from datetime import timedelta

from sqlalchemy.orm import Session

from app.core.database import store_write
from app.models import Follow, Tweet, User
from app.models.base import utcnow
from app.schemas.roles import Role
from app.services.users import create_user

logger = logging.getLogger(__name__)

_BANNER = "https://images.pexels.com/photos/1323550/pexels-photo-1323550.jpeg?auto=compress&cs=tinysrgb&w=1200&h=400&fit=crop"


def _pexels(photo_id: int, w: int = 150, h: int = 150) -> str:
    return (
        f"https://images.pexels.com/photos/{photo_id}/pexels-photo-{photo_id}.jpeg"
        f"?auto=compress&cs=tinysrgb&w={w}&h={h}&fit=crop"
    )


SEED_USERS = [
    {
        "username": "admin",
        "password": "adminpass",
        "role": Role.ADMIN,
        "display_name": "Admin User",
        "bio": "Platform Administrator • Managing the future of social media",
        "location": "San Francisco, CA",
        "website": "https://twittoo.com",
        "avatar": _pexels(220453),
        "verified": True,
    },
    {
        "username": "editor",
        "password": "editorpass",
        "role": Role.EDITOR,
        "display_name": "Sarah Editor",
        "bio": "Content Editor • Curating amazing stories • Coffee enthusiast ☕",
        "location": "New York, NY",
        "website": "https://saraheditor.com",
        "avatar": _pexels(415829),
    },
    {
        "username": "user",
        "password": "userpass",
        "role": Role.USER,
        "display_name": "John User",
        "bio": "Tech enthusiast • Love coding and coffee • Building the future",
        "location": "Austin, TX",
        "website": "https://johnuser.dev",
        "avatar": _pexels(614810),
    },
    {
        "username": "alice",
        "password": "alicepass",
        "role": Role.USER,
        "display_name": "Alice Johnson",
        "bio": "Full-stack developer • React enthusiast • Dog lover 🐕",
        "location": "Seattle, WA",
        "website": "https://alicejohnson.dev",
        "avatar": _pexels(1239291),
    },
    {
        "username": "bob",
        "password": "bobpass",
        "role": Role.USER,
        "display_name": "Bob Smith",
        "bio": "Backend engineer • Node.js expert • Always learning something new",
        "location": "Denver, CO",
        "website": "https://bobsmith.tech",
        "avatar": _pexels(91227),
    },
    {
        "username": "emma",
        "password": "emmapass",
        "role": Role.USER,
        "display_name": "Emma Wilson",
        "bio": "UI/UX Designer • Creating beautiful experiences • Design systems advocate",
        "location": "Los Angeles, CA",
        "website": "https://emmawilson.design",
        "avatar": _pexels(1130626),
    },
]

# (author username, content, image photo ids)
SEED_TWEETS = [
    ("admin", "Welcome to Twittoo! 🚀 The future of microblogging is here. Join our amazing community and share your thoughts with the world! #Welcome #Twittoo #SocialMedia", [267350]),
    ("editor", "Just finished reviewing some incredible content today! 📝 The quality of posts on this platform continues to amaze me. Keep up the great work everyone! #ContentCreation #Quality", []),
    ("user", "Hello Twittoo community! 👋 Excited to be part of this amazing platform. Looking forward to connecting with fellow tech enthusiasts! #HelloWorld #TechCommunity", []),
    ("alice", 'Just finished reading "Clean Code" by Robert Martin 📚 Highly recommend it to all developers! The principles in this book are game-changing. #CleanCode #Programming #BookRecommendation', [159711]),
    ("bob", "Deep diving into Node.js microservices today! 🔧 The architecture patterns are fascinating. Building scalable systems is both challenging and rewarding. #NodeJS #Microservices #BackendDev", []),
    ("emma", "Working on a new design system! 🎨 Color palettes, typography, and component libraries coming together beautifully. Design systems are the backbone of great UX! #DesignSystems #UX #UI", [196644]),
    ("admin", "Beautiful morning for coding! ☀️ Remember to take breaks, stay hydrated, and keep that work-life balance. Your mental health matters! 💻☕ #WorkLifeBalance #MentalHealth #Coding", [374074]),
    ("user", "The JavaScript ecosystem moves so fast! 🚀 Just when you think you've caught up, there's a new framework or tool to learn. Embracing the journey of continuous learning! #JavaScript #WebDev #Learning", []),
    ("alice", "Coffee is absolutely essential for productivity! ☕ What's your favorite brewing method? I'm currently obsessed with pour-over coffee. The ritual is almost as important as the caffeine! #Coffee #Productivity", [302899]),
    ("bob", "Pro tip: Always write tests for your code! 🧪 Future you will thank present you when you need to refactor or add new features. Testing is not optional, it's essential! #Testing #BestPractices #CleanCode", []),
    ("editor", "The power of good documentation cannot be overstated! 📖 It's like writing a love letter to your future self and your teammates. Clear docs save countless hours! #Documentation #TeamWork", []),
    ("emma", "User research session today! 👥 Nothing beats talking directly to users to understand their pain points and needs. Data-driven design decisions for the win! #UserResearch #UXDesign #DataDriven", [3184418]),
    ("admin", "Reminder: Be kind, be helpful, and keep learning! 🌟 That's what makes great communities thrive. Together we can build something amazing! #Community #Kindness #Growth", []),
    ("alice", "Just deployed my first full-stack app to production! 🎉 The feeling is incredible. From localhost to the world wide web! Thanks to everyone who helped along the way! #Deployment #FullStack #Achievement", [1181263]),
    ("user", "AI in web development is fascinating! 🤖 From code completion to automated testing, AI is transforming how we build software. The future looks incredibly bright! #AI #WebDev #Future #Technology", []),
    ("bob", "Debugging is like being a detective in a crime movie where you're also the murderer! 🕵️‍♂️ But hey, that's what makes it interesting, right? #Debugging #Programming #Humor", []),
    ("editor", "Clean code is not written by following a set of rules. Clean code is written by passionate programmers who care about their craft! 💎 #CleanCode #Craftsmanship #Programming", []),
    ("emma", "Accessibility is not a feature, it's a fundamental right! ♿ Designing inclusive experiences benefits everyone. Let's build a web that works for all! #Accessibility #InclusiveDesign #WebForAll", [7688336]),
    ("admin", "Remember: Every expert was once a beginner! 🌱 Every pro was once an amateur. Keep pushing forward, embrace the learning process, and celebrate small wins! #Growth #Learning #Motivation", []),
    ("alice", "The best error message is the one that never shows up! 🚫 Prevention is better than cure. Defensive programming and proper validation save the day! #ErrorHandling #BestPractices", []),
    ("user", "Collaboration over competition! 🤝 Let's build amazing things together. The tech community is strongest when we support each other! #Collaboration #Community #TechTogether", []),
    ("bob", "Performance optimization is an art! 🎨 Every millisecond counts in user experience. From lazy loading to code splitting, every optimization matters! #Performance #WebOptimization #UX", [590016]),
]

# (follower, followee)
SEED_FOLLOWS = [
    ("admin", "editor"),
    ("admin", "user"),
    ("editor", "admin"),
    ("editor", "alice"),
    ("user", "admin"),
    ("user", "alice"),
    ("alice", "admin"),
    ("alice", "editor"),
    ("bob", "admin"),
    ("emma", "editor"),
]


def seed_store(db: Session, rng: random.Random | None = None) -> dict[str, int]:
    """
    Populate an empty store with demo users, tweets and follows.

    Does nothing if any user already exists. Tweet timestamps are spread over
    the past week using `rng`. Returns the number of rows created per collection.
    """
    with store_write(db):
        if db.query(User).first() is not None:
            logger.info("Store already populated; skipping seed.")
            return {"users": 0, "tweets": 0, "follows": 0}

        rng = rng or random.Random()
        now = utcnow()

        users: dict[str, User] = {}
        for account in SEED_USERS:
            fields = dict(account)
            username = fields.pop("username")
            password = fields.pop("password")
            role = fields.pop("role")
            users[username] = create_user(
                db,
                username,
                password,
                role=role,
                banner=_BANNER,
                created_at=now - timedelta(days=rng.uniform(0, 365)),
                **fields,
            )

        for username, content, photo_ids in SEED_TWEETS:
            author = users[username]
            db.add(
                Tweet(
                    user_id=author.id,
                    username=username,
                    content=content,
                    images=[_pexels(p, 800, 600) for p in photo_ids],
                    timestamp=now - timedelta(seconds=rng.uniform(0, 7 * 24 * 3600)),
                )
            )
            author.tweets_count = (author.tweets_count or 0) + 1

        for follower, followee in SEED_FOLLOWS:
            db.add(Follow(follower_id=users[follower].id, following_id=users[followee].id))

        db.commit()
    created = {"users": len(users), "tweets": len(SEED_TWEETS), "follows": len(SEED_FOLLOWS)}
    logger.info(
        "Seeded %s users, %s tweets and %s follows",
        created["users"],
        created["tweets"],
        created["follows"],
    )
    return created
