from moder_censor.app import run
import os

# Optionally set BOT_TOKEN and ADMINS here instead of using .env or external
# environment variables. Leave empty to read from the environment as usual.
# Engine options are read from PROFANITY_LANGUAGES, PROFANITY_WHOLE_WORD,
# PROFANITY_GRAWLIX, PROFANITY_GRAWLIX_CHAR and PROFANITY_CENSOR_TYPE.
BOT_TOKEN = ''
ADMINS = ''


if __name__ == "__main__":
	if BOT_TOKEN:
		os.environ["BOT_TOKEN"] = BOT_TOKEN
	if ADMINS:
		os.environ["ADMINS"] = ADMINS

	run()
