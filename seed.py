from pixlink.database import SessionLocal, engine, Base
from pixlink.models import Image, User
from pixlink.schemas import ImageUpload, UserCreate
from pixlink.services import create_user, upload_image

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear existing data
db.query(Image).delete()
db.query(User).delete()
db.commit()

alice = create_user(db, UserCreate(username="alice", email="alice@example.com"))
bob = create_user(db, UserCreate(username="bob", email="bob@example.com"))

# Sample images
images = [
    ImageUpload(
        user_id=alice.id,
        title="Sunset over the bay",
        description="Taken from the pier just after eight.",
        filename="sunset.jpg",
        file_path="/uploads/alice/sunset.jpg",
        file_size=284_112,
        mime_type="image/jpeg",
    ),
    ImageUpload(
        user_id=alice.id,
        title="Whiteboard notes",
        filename="notes.png",
        file_path="/uploads/alice/notes.png",
        file_size=91_530,
        mime_type="image/png",
        is_public=False,
    ),
    ImageUpload(
        user_id=bob.id,
        title="Cat on the keyboard",
        description=None,
        filename="cat.gif",
        file_path="/uploads/bob/cat.gif",
        file_size=1_048_576,
        mime_type="image/gif",
    ),
]

created = [upload_image(db, image) for image in images]

print("Database seeded successfully!")
print(f"  - 2 users")
print(f"  - {len(created)} images")
for image in created:
    visibility = "public" if image.is_public else "private"
    print(f"    /i/{image.short_url}  {image.title} ({visibility})")

db.close()
