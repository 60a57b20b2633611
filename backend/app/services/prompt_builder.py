from textwrap import dedent


MAX_TOPICS = 25

TRENDS_EXAMPLE = """[
    {"term": "DIY solar-powered gadgets", "dailySearches": 150000, "videoCount": 75},
    {"term": "Beginner's guide to quantum computing", "dailySearches": 110000, "videoCount": 40}
]"""

IDEAS_EXAMPLE = """{
    "titles": [
        "I Built a Solar-Powered Gadget and It Blew My Mind",
        "The ULTIMATE DIY Solar Gadget Guide (2024 Edition)",
        "Can You REALLY Power Gadgets with the Sun? Let's Find Out!",
        "5 Solar-Powered Gadgets You Can Build THIS Weekend",
        "Solar Power for Beginners: My First DIY Project"
    ],
    "outline": "### Video Outline: DIY Solar Gadgets\\n\\n**1. Intro Hook (0:00-0:30):**\\n   - Start with a dramatic shot of the final gadget working.\\n\\n**2. The Parts (0:30-1:30):**\\n   - Quick layout of all the components.\\n\\n**3. The Build (1:30-4:00):**\\n   - Step-by-step assembly with on-screen notes.\\n\\n**4. The Test & Reveal (4:00-5:30):**\\n   - Show the gadget charging a phone outside.\\n\\n**5. Conclusion & Call to Action (5:30-6:00):**\\n   - Recap and ask viewers what to build next."
}"""


def niche_instruction(niche: str | None) -> str:
    cleaned = (niche or "").strip()
    if cleaned:
        return f"The topics MUST be within the '{cleaned}' niche."
    return "The topics should be diverse and can come from any niche."


def build_trends_prompt(selected_date: str, niche: str | None, search_volume: str, saturation_level: str) -> str:
    """
    Prompt asking the model for high-demand, low-saturation search terms on a date.
    search_volume is parsed as an integer; saturation_level is embedded as given.
    """
    volume = int(str(search_volume).strip())
    saturation = str(saturation_level).strip()
    return dedent(
        f"""
        Generate a list of up to {MAX_TOPICS} YouTube search topics for the specific date: {selected_date}.
        {niche_instruction(niche)}

        The topics must meet two specific criteria:
        1. The topic must have a high daily search volume, specifically over {volume} searches on that day.
        2. The topic must have an extremely low content saturation, meaning the ratio of existing videos to daily searches is less than {saturation} (videoCount / dailySearches < {saturation}).

        For each topic that meets these criteria, provide the search term, a realistic but fictional estimated daily searches for {selected_date}, and a realistic but fictional estimated total number of videos that exist for that search term.

        CRITICAL: Respond with ONLY a valid JSON array of objects.
        Each object in the array must have exactly three keys: 'term' (string), 'dailySearches' (number), and 'videoCount' (number).
        Do not include any other text, markdown, or explanations before or after the JSON array.
        If no topics match the strict criteria, you MUST return an empty JSON array: [].

        Example of a valid response:
        """
    ).strip() + "\n" + TRENDS_EXAMPLE + "\n"


def build_ideas_prompt(term: str) -> str:
    cleaned = (term or "").strip()
    if not cleaned:
        raise ValueError("term is required to generate content ideas")
    return dedent(
        f"""
        You are a creative assistant for YouTube creators. A creator wants to make a video about the topic: "{cleaned}".

        Your task is to provide creative, actionable ideas to help them get started.

        Please provide the following:
        1. A list of exactly 5 click-worthy, engaging video titles.
        2. A brief, sample video outline with a clear structure (e.g., Intro, Main Points, Conclusion).

        CRITICAL: Respond with ONLY a valid JSON object.
        The object must have exactly two keys: 'titles' (an array of 5 strings) and 'outline' (a single string with markdown for formatting).
        Do not include any other text, markdown, or explanations before or after the JSON object.

        Example of a valid response:
        """
    ).strip() + "\n" + IDEAS_EXAMPLE + "\n"
