from fastapi import FastAPI
from mangum import Mangum

from corsrelay import Relay
from corsrelay.version import VERSION
from dotenv import load_dotenv


load_dotenv()

relay = Relay()
app = FastAPI(title="corsrelay", version=VERSION)


relay.to_fastapi(app)


handler = Mangum(app)
