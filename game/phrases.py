"""Phrase banks and narration texts for Solo Mafia bots and the narrator."""

from enum import Enum

from game.rules import Role, Winner


class Category(str, Enum):
    """Kind of chat line a bot produces."""

    DEFAULT = "default"
    ACCUSATION = "accusation"
    DEFENSE = "defense"
    SHERIFF_HINT = "sheriff-hint"
    STRATEGY = "strategy"


# Case-insensitive substrings scanned out of the human's latest public message
TRIGGER_WORDS: dict[str, tuple[str, ...]] = {
    "accusation": ("mafia", "suspect", "kill", "vote"),
    "defense": ("innocent", "not me", "i'm not", "i am not", "prove"),
    "sheriff": ("checked", "sheriff", "role"),
    "strategy": ("let's", "suggest", "think", "plan"),
}

# Self-declared innocence; town bots find it suspicious
INNOCENCE_PATTERNS = ("i'm not mafia", "i'm a civilian", "not me", "definitely not me")

# Sheriff-like phrasing; mafia bots flag the author as a likely sheriff
SHERIFF_LIKE_PATTERNS = ("suspicious", "checked", "i think that")

ROLE_NAMES = {
    Role.CIVILIAN: "Civilian",
    Role.MAFIA: "Mafia",
    Role.SHERIFF: "Sheriff",
}

FALLBACK_LINE = "I think we need to pay closer attention."

# Indexed [role][category][personality]; personality order is
# aggressive, analytical, cautious, calm.
BOT_PHRASES: dict[Role, dict[Category, list[list[str]]]] = {
    Role.MAFIA: {
        Category.DEFAULT: [
            [
                "Whoever keeps quiet is hiding something.",
                "We need to pick someone today, no more stalling.",
                "I don't trust the loud ones. Too eager.",
                "Someone here is playing us and I want them gone.",
                "Stop talking in circles and name a suspect.",
            ],
            [
                "Let's think logically about who could be mafia.",
                "If we analyse everyone's behaviour, a few people stand out.",
                "I feel like we're missing important details in this discussion.",
                "Looking at how people voted before, there are interesting patterns.",
                "Statistically, the mafia is likely among the quiet players.",
            ],
            [
                "I'm not mafia, I'm a civilian!",
                "Why would anyone accuse me?",
                "I can prove I'm on the town's side.",
                "Don't look at me, look at the others.",
                "I swear I'm not mafia! Believe me!",
            ],
            [
                "Let's not rush to conclusions.",
                "Does anyone have actual evidence? I haven't seen anything.",
                "We're wasting precious time on empty arguments.",
                "What if the mafia is deliberately trying to confuse us?",
                "Maybe we should change the subject to something more useful?",
                "I think we should all calm down and think rationally.",
            ],
        ],
        Category.ACCUSATION: [
            [
                "These accusations are absurd! You look suspicious yourself.",
                "You're deflecting by accusing others!",
                "Your arguments are not convincing at all.",
                "You're acting like the mafia, trying to confuse everyone!",
                "You're throwing accusations around without any basis.",
            ],
            [
                "Your accusations aren't logical. Let's look at the facts.",
                "If I were mafia, I'd be acting very differently.",
                "Statistically, your accusations have little ground.",
                "Your theory is interesting, but it has serious gaps.",
                "Your conclusions rest on false premises.",
            ],
            [
                "I'm not mafia, I swear! Why are you accusing me?",
                "Please believe me, I'm on the town's side!",
                "I'm really a civilian, don't vote against me!",
                "You're making a mistake by accusing me.",
                "If you vote me out, the town loses a civilian.",
            ],
            [
                "Have you considered that the real mafia is staying silent right now?",
                "Let's not get distracted by groundless accusations.",
                "These accusations only help the real mafia.",
                "Maybe we should hear from the other players?",
                "Instead of accusing me, let's think strategically.",
            ],
        ],
        Category.DEFENSE: [
            [
                "That's exactly how the real mafia defends itself!",
                "The more you justify yourself, the more suspicious you look.",
                "Typical mafia defence: saying you're not mafia.",
                "You're too nervous for someone innocent.",
                "Your excuses sound rehearsed.",
            ],
            [
                "Interesting how actively you defend yourself. Statistically that's suspicious.",
                "Your arguments are logical but not enough to clear you.",
                "Let's go over your behaviour since day one.",
                "I noticed some contradictions in what you've said.",
                "I'd like to hear more concrete arguments in your defence.",
            ],
            [
                "I'm not mafia either! We're all just trying to survive.",
                "I get it, I've been accused without reason too.",
                "Let's not attack each other without evidence.",
                "We're all in the same boat, except the mafia of course.",
                "Defending yourself is normal, I would too.",
            ],
            [
                "Let's not get stuck on excuses.",
                "Instead of excuses, let's discuss strategy.",
                "These excuses only play into the mafia's hands.",
                "Excuses prove nothing, we need facts.",
                "Let's stop going round in circles.",
            ],
        ],
        Category.STRATEGY: [
            [
                "I suggest we vote against the quietest players.",
                "Let's focus on those who barely talk.",
                "Watch the ones who keep changing their minds.",
                "My strategy is to catch contradictions in what people say.",
                "Those who accuse too eagerly deserve a closer look.",
            ],
            [
                "I suggest we rule out the least likely candidates one by one.",
                "Let's build a suspicion matrix for every player.",
                "We should analyse the voting patterns.",
                "My strategy is based on probabilities.",
                "Let's use deduction to find the mafia.",
            ],
            [
                "Let's be careful not to eliminate a civilian by mistake.",
                "I'd rather wait for more information before voting.",
                "Rushing is exactly what the mafia wants.",
                "We should only vote when we're sure.",
                "Maybe we should hold off and listen a bit longer.",
            ],
            [
                "Maybe we should focus on a different part of the game?",
                "Strategy is fine, but intuition matters too.",
                "Sometimes the best strategy is no strategy.",
                "Let's act unpredictably to confuse the mafia.",
                "I prefer an adaptive approach over a rigid plan.",
            ],
        ],
    },
    Role.SHERIFF: {
        Category.DEFAULT: [
            [
                "I'm watching every one of you closely.",
                "Some of you are behaving oddly.",
                "I'm paying attention to how people vote.",
                "I've noticed some strange behaviour from certain players.",
                "The key to winning is being observant.",
            ],
            [
                "If we analyse everyone's behaviour, we can find inconsistencies.",
                "I'm trying to build a logical chain of events.",
                "The mafia tends to show certain behaviour patterns.",
                "When you eliminate the impossible, whatever remains is the truth.",
                "My analysis is based on objective observations.",
            ],
            [
                "I'm not sure yet who the mafia could be.",
                "We need more information before drawing conclusions.",
                "Let's not rush with accusations.",
                "I'd rather collect more data first.",
                "It's too early for final conclusions.",
            ],
            [
                "I have some thoughts, but I'm not ready to share them.",
                "Sometimes silence says more than words.",
                "I know more than I can say right now.",
                "Trust me, I have a plan.",
                "Everything will become clear soon.",
            ],
        ],
        Category.SHERIFF_HINT: [
            [
                "If I could check people, I'd start with the most suspicious ones.",
                "The sheriff's role is very important in this game.",
                "Checks are the key to a town victory.",
                "Information about roles is the most valuable thing here.",
                "The sheriff should choose carefully whom to check every night.",
            ],
            [
                "Statistically, a sheriff has good odds of finding the mafia within a few nights.",
                "Logically, the sheriff should check the most suspicious players first.",
                "Mathematically, the sheriff's chances grow every night.",
                "With the right approach, checks can be planned optimally.",
                "The odds of finding every mafia member depend on many factors.",
            ],
            [
                "I wouldn't reveal role information right away, even if I had it.",
                "A sheriff must be careful not to expose themselves to the mafia.",
                "Role information is valuable, but dangerous.",
                "I'd advise the sheriff not to reveal too early.",
                "If anyone knows roles, they should share carefully.",
            ],
            [
                "I know more than it seems at first glance.",
                "I see a picture the rest of you can't see yet.",
                "All in good time, it will all become clear.",
                "I'd rather keep my thoughts to myself for now.",
                "Trust me, I have a plan.",
            ],
        ],
    },
    Role.CIVILIAN: {
        Category.DEFAULT: [
            [
                "One of us is definitely mafia, stay sharp.",
                "Whoever stays silent is the mafia!",
                "I don't trust those who make too many excuses.",
                "I suspect those trying to draw attention away from themselves.",
                "Watch how everyone votes.",
            ],
            [
                "Let's think logically, who could be mafia?",
                "If we analyse all the messages, we can find clues.",
                "I'm a civilian and I want to find the mafia with logic.",
                "Let's rule out, one by one, those who surely aren't mafia.",
                "If we analyse the votes, we'll see patterns.",
            ],
            [
                "How scary to think the mafia is right next to us!",
                "I'm so nervous! Are we ever going to find them?",
                "My heart tells me someone here is not who they claim to be!",
                "I'm afraid of voting out the wrong person!",
                "I can't believe one of you is lying to us.",
            ],
            [
                "Let's stay calm and search methodically.",
                "Does anyone have suspicions? I'm ready to hear every theory.",
                "No need to panic, let's reason sensibly.",
                "Panic only helps the mafia, let's be rational.",
                "I'm sure together we'll find the right answer.",
            ],
        ],
        Category.ACCUSATION: [
            [
                "I agree, that player really is suspicious!",
                "Yes, I noticed odd behaviour too.",
                "I support these accusations, let's vote!",
                "I've suspected that player for a while!",
                "I'm ready to vote against this suspicious type.",
            ],
            [
                "Let's analyse these accusations logically.",
                "Do we have enough evidence for this?",
                "I want to hear both sides before concluding.",
                "Logically, these accusations make some sense.",
                "Let's check every argument methodically.",
            ],
            [
                "Oh no, have we actually found the mafia?",
                "I'm shocked! But it explains a lot!",
                "I always felt something was off!",
                "I can hardly believe it! Is it really them?",
                "What if we're wrong and it's a civilian?",
            ],
            [
                "Let's not rush to conclusions over these accusations.",
                "Let's hear the accused out before deciding.",
                "I think we need more evidence.",
                "Let's be fair and objective with accusations.",
                "Let's calmly weigh the pros and cons.",
            ],
        ],
        Category.DEFENSE: [
            [
                "Your excuses sound unconvincing.",
                "The more you defend yourself, the more suspicious you look.",
                "I don't believe your excuses.",
                "Your defence only strengthens my suspicion.",
                "That sounds like a typical mafia speech.",
            ],
            [
                "Your arguments make sense, but there are gaps.",
                "Let's go through your excuses logically.",
                "I'd like more concrete proof of your innocence.",
                "If you're really a civilian, your actions should be consistent.",
                "Let's break your arguments down point by point.",
            ],
            [
                "I want to believe you, but I'm so scared of getting it wrong!",
                "It's so hard to tell who's telling the truth!",
                "I'm worried we'll execute an innocent!",
                "My heart says trust you, my head has doubts!",
                "I'm afraid of making the wrong choice!",
            ],
            [
                "I've heard your defence and I'll think it over.",
                "Everyone deserves a chance to defend themselves.",
                "Let's not rush after hearing these excuses.",
                "Let's be fair and listen to all sides.",
                "I appreciate your honesty.",
            ],
        ],
        Category.STRATEGY: [
            [
                "I suggest we vote against the most suspicious players.",
                "Let's focus on those who barely talk.",
                "My strategy is to catch contradictions.",
                "Let's watch who tries to steer the discussion.",
                "I'm suspicious of anyone who accuses too eagerly.",
            ],
            [
                "I suggest logically ruling out the least likely candidates.",
                "Let's build a suspicion matrix for every player.",
                "We should analyse the voting patterns.",
                "Let's use deduction to find the mafia.",
                "My strategy is the elimination of the impossible.",
            ],
            [
                "I feel we need to act fast!",
                "Let's unite against the common enemy!",
                "I'm scared, but we have to be decisive!",
                "I feel we're on the right track!",
                "Let's trust our intuition!",
            ],
            [
                "I suggest we act carefully and not hurry.",
                "Let's calmly discuss every possible strategy.",
                "Panic only helps the mafia.",
                "My strategy is to stay calm and rational.",
                "Let's think through every step.",
            ],
        ],
    },
}

# Sheriff bot naming a confirmed, still living mafia seat
SHERIFF_HINTS = [
    "I've been watching {name} closely, and I don't like what I see.",
    "There's something suspicious about how {name} behaves.",
    "I'd advise taking a closer look at {name}.",
    "I think that {name} is hiding something from us.",
]

# Mafia bot casting doubt on a seat that sounds like the sheriff
DISCREDIT_LINES = [
    "{name} is talking like they know everything. That's a bluff.",
    "Don't listen to {name}, they're trying to lead us astray.",
    "Funny how {name} always points fingers. What are they hiding?",
    "{name} wants us to trust them blindly. I don't.",
]

# Mafia night chat, per personality
MAFIA_NIGHT_LINES = [
    [
        "I suggest we kill the most active player.",
        "Let's get rid of whoever talks the most.",
        "We need to remove whoever might be the sheriff.",
        "We have to take out the most dangerous player.",
    ],
    [
        "Judging by the votes, the best target is obvious.",
        "If we reason it through, the most dangerous player for us is clear.",
        "Statistically, it pays to take out the sheriff candidate.",
        "Let's kill whoever could unite the civilians.",
    ],
    [
        "Let's be careful and not kill too obvious a target.",
        "We should act quietly and not draw attention.",
        "Let's not hurry with the choice.",
        "Let's think carefully about whom to kill.",
    ],
    [
        "Let's pick a victim nobody suspects.",
        "We should be cunning with our choice.",
        "Let's choose a target that doesn't point back at us.",
        "A quiet kill is a good kill.",
    ],
]

MAFIA_TARGET_LINES = [
    "I think we should kill {name}.",
    "{name} looks dangerous, let's take them out.",
    "I suggest voting for {name}.",
    "{name} might be the sheriff, they have to go.",
    "I'd pick {name} as the target.",
]

LAST_WORDS = [
    "You're making a mistake! I'm not mafia!",
    "I was loyal to the town to the end...",
    "You'll regret this decision!",
    "Remember my words: I'm innocent!",
    "The real mafia is still among you!",
    "This is unfair! I don't deserve this!",
    "Farewell, friends... I hope you find the real mafia.",
    "You just eliminated a civilian. Good job, mafia!",
]

MAFIA_LAST_WORD = "You caught me... but this isn't over yet!"

DAY_VOTE_LINE = "I vote against {name}!"
NIGHT_VOTE_LINE = "I vote to kill {name}."

# Narration
GAME_START_TEXT = "The game has begun! Day 1. You have {seconds} seconds to discuss."
VOTING_START_TEXT = "Discussion time is over. Voting begins, you have {seconds} seconds."
NO_ELIMINATION_TEXT = "No one was eliminated by the vote."
NIGHT_FALLS_TEXT = "Night falls. The town goes to sleep..."
CHOSEN_FOR_ELIMINATION_TEXT = "{name} was chosen for elimination."
ELIMINATION_REVEAL_TEXT = "{name} has left the game. Their role: {role}."
HUMAN_OUT_TEXT = "{name} was eliminated. Their role: {role}."
MAFIA_WAKES_TEXT = "The mafia wakes up. Discuss whom to kill."
MAFIA_CHOOSE_TEXT = "Time is up. Mafia, choose your victim."
SHERIFF_TURN_TEXT = "Sheriff's turn. Choose a player to check."
MORNING_TEXT = "Morning has come."
NIGHT_KILL_TEXT = "{name} was killed during the night. Their role: {role}."
QUIET_NIGHT_TEXT = "Nobody died tonight."
SHERIFF_RESULT_TEXT = "Sheriff, you checked {name}. Result: {result}."
NEW_DAY_TEXT = "Day {day}. You have {seconds} seconds to discuss."

WIN_TEXTS = {
    Winner.MAFIA: "The mafia wins! They have taken over the town.",
    Winner.CIVILIANS: "The civilians win! All of the mafia has been eliminated.",
}


def role_name(role: Role) -> str:
    return ROLE_NAMES.get(role, "Unknown")


def phrase_bank(role: Role, category: Category, personality: int) -> list[str]:
    """Phrases for the (role, category, personality) cell; falls back to the role's default bank."""
    by_category = BOT_PHRASES.get(role, {})
    cells = by_category.get(category) or by_category.get(Category.DEFAULT) or []
    if not cells:
        return []
    return cells[personality % len(cells)]
