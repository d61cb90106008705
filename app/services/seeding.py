"""Seed a starter question bank (embedded systems exam practice) when the table is empty."""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Choice, Question

logger = logging.getLogger(__name__)

# (level, category, prompt, explanation, [(label, is_correct), ...])
SEED_QUESTIONS = [
    (
        "beginner",
        "hardware",
        "Which memory keeps its contents when power is removed?",
        "Flash is non-volatile; SRAM and DRAM lose their contents without power.",
        [("SRAM", False), ("DRAM", False), ("Flash memory", True), ("CPU registers", False)],
    ),
    (
        "beginner",
        "software",
        "What does an interrupt service routine (ISR) typically do?",
        "An ISR handles the event quickly and defers longer work to task context.",
        [
            ("Handles a hardware event and returns quickly", True),
            ("Runs the main application loop", False),
            ("Boots the operating system", False),
            ("Compiles source code", False),
        ],
    ),
    (
        "beginner",
        "hardware",
        "Which peripheral converts an analog voltage into a digital value?",
        "An ADC (analog-to-digital converter) samples and quantizes analog input.",
        [("DAC", False), ("ADC", True), ("UART", False), ("PWM", False)],
    ),
    (
        "intermediate",
        "rtos",
        "What problem does priority inheritance address?",
        "Priority inheritance bounds priority inversion around shared resources.",
        [
            ("Stack overflow", False),
            ("Priority inversion", True),
            ("Cache coherency", False),
            ("Memory fragmentation", False),
        ],
    ),
    (
        "intermediate",
        "hardware",
        "What is the main purpose of a watchdog timer?",
        "A watchdog resets the system when software stops servicing it.",
        [
            ("Measure elapsed time for profiling", False),
            ("Recover from a hung system by resetting it", True),
            ("Generate PWM output", False),
            ("Synchronize clocks between cores", False),
        ],
    ),
    (
        "intermediate",
        "software",
        "Why is the `volatile` qualifier used on memory-mapped registers in C?",
        "It prevents the compiler from caching or removing accesses to the register.",
        [
            ("To place the variable in flash", False),
            ("To make access atomic", False),
            ("To stop the compiler optimizing away reads and writes", True),
            ("To align the variable to a word boundary", False),
        ],
    ),
    (
        "advanced",
        "rtos",
        "Under rate-monotonic scheduling, how are task priorities assigned?",
        "Shorter period means higher priority under rate-monotonic scheduling.",
        [
            ("Longer period gets higher priority", False),
            ("Shorter period gets higher priority", True),
            ("Earliest deadline gets higher priority at run time", False),
            ("Priorities are assigned round-robin", False),
        ],
    ),
    (
        "advanced",
        "hardware",
        "Which bus uses separate lines for clock, data out, data in and chip select?",
        "SPI uses SCLK, MOSI, MISO and SS/CS.",
        [("I2C", False), ("CAN", False), ("SPI", True), ("1-Wire", False)],
    ),
    (
        "advanced",
        "software",
        "What is the utilization bound for rate-monotonic scheduling as the task count grows?",
        "n(2^(1/n) - 1) approaches ln 2, about 69%.",
        [("About 50%", False), ("About 69%", True), ("About 83%", False), ("100%", False)],
    ),
]


async def seed_questions(db: AsyncSession) -> int:
    """Insert SEED_QUESTIONS if the questions table is empty. Returns the number inserted."""
    result = await db.execute(select(func.count(Question.id)))
    if result.scalar_one() > 0:
        return 0

    for level, category, prompt, explanation, choices in SEED_QUESTIONS:
        db.add(
            Question(
                level=level,
                category=category,
                prompt=prompt,
                explanation=explanation,
                choices=[Choice(label=label, is_correct=ok) for label, ok in choices],
            )
        )
    await db.commit()
    logger.info("Seeded %d questions", len(SEED_QUESTIONS))
    return len(SEED_QUESTIONS)
