from dotenv import load_dotenv

# Load environment variables from .env as early as possible so the settings
# layer sees them when it reads os.environ.
load_dotenv()
