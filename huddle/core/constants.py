"""Global constants for the huddle application."""

# Firestore hard-caps a write batch at 500 operations
FIRESTORE_BATCH_LIMIT = 400

# Collection names
USERS_COLLECTION = "users"
FRIENDSHIPS_COLLECTION = "friendships"
FRIEND_REQUESTS_COLLECTION = "friend_requests"
BLOCKS_COLLECTION = "blocks"
GROUPS_COLLECTION = "groups"
INVITATIONS_COLLECTION = "invitations"
CHATS_COLLECTION = "chats"

# Request / invitation lifecycle
STATUS_PENDING = "pending"
STATUS_ACCEPTED = "accepted"
STATUS_REJECTED = "rejected"

# Friend requests
FRIEND_REQUEST_MESSAGE_MAX_LENGTH = 300

# Friendship status between two users, as seen from the first one
FRIENDSHIP_NONE = "none"
FRIENDSHIP_FRIENDS = "friends"
FRIENDSHIP_REQUEST_SENT = "request_sent"
FRIENDSHIP_REQUEST_RECEIVED = "request_received"
FRIENDSHIP_BLOCKED = "blocked"

# Suggestions
DEFAULT_SUGGESTION_LIMIT = 10
NEW_USER_SUGGESTION_REASON = "New to the platform"

# Group roles
ROLE_ADMIN = "admin"
ROLE_SUB_ADMIN = "subAdmin"
ROLE_MEMBER = "member"
GROUP_ROLES = (ROLE_ADMIN, ROLE_SUB_ADMIN, ROLE_MEMBER)

# Group limits
GROUP_NAME_MAX_LENGTH = 30
GROUP_MIN_MEMBERS = 2
GROUP_MAX_MEMBERS = 100
INVITATION_TYPE_GROUP = "group"

# Chats
CHAT_TYPE_PEER = "peer"
CHAT_TYPE_GROUP = "group"
PINNED_CONTENT_LIMIT = 3
