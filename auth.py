import logging
import os

from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error

from errors import AuthError
from settings import CREDENTIALS_FILE, SCOPES, TOKEN_FILE

logger = logging.getLogger(__name__)


def get_credentials(token_file=TOKEN_FILE, credentials_file=CREDENTIALS_FILE, scopes=SCOPES):
    """Load the cached user token, refreshing it or running the browser flow when needed.

    The resulting credentials are saved back to token_file so later runs skip the login.
    """
    credentials = None
    #Verifying if "Sheets API" credentials are already set.
    if os.path.exists(token_file):
        credentials = Credentials.from_authorized_user_file(token_file, scopes)
    if credentials and credentials.valid:
        logger.info(f"Using cached credentials from {token_file}")
        return credentials
    try:
        if credentials and credentials.expired and credentials.refresh_token:
            logger.info("Refreshing expired credentials")
            credentials.refresh(Request())
        else:
            logger.info(f"Starting OAuth flow with {credentials_file}")
            flow = InstalledAppFlow.from_client_secrets_file(credentials_file, scopes)
            credentials = flow.run_local_server(port=0)
    except FileNotFoundError as error:
        raise AuthError(f"{credentials_file} was not found. Download it from the Google Cloud console.") from error
    except (GoogleAuthError, OAuth2Error) as error:
        raise AuthError(f"Authorization failed: {error}") from error
    except ValueError as error:
        raise AuthError(f"{credentials_file} is not a valid client secrets file: {error}") from error
    with open(token_file, "w") as token:
        token.write(credentials.to_json())
    return credentials
